# ============================================================================
# CONFIGURATION AND LOGGING TESTS
# ============================================================================
# STATUS: Tests - Defaults, environment loading, structured logging
# PURPOSE: Verify configuration resolution and log context propagation
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration and Logging Tests

Run with:
    pytest tests/test_config.py -v
"""

import json
import logging

import pytest

from core.config.defaults import (
    ConnectionDefaults,
    DialectCapabilities,
    IndexNamingDefaults,
    get_defaults,
    reset_defaults,
)
from core.logging import (
    HumanFormatter,
    StructuredFormatter,
    get_current_context,
    log_context,
)


# ============================================================================
# DIALECT
# ============================================================================

class TestDialectCapabilities:

    def test_postgresql_defaults(self):
        capabilities = DialectCapabilities.postgresql()
        assert capabilities.arbitrary_default_expressions is True
        assert capabilities.supports_partial_indexes is True
        assert capabilities.default_index_method == "btree"

    @pytest.mark.parametrize("type_name", ["varchar", "text", "bpchar", "char", "TEXT"])
    def test_character_types(self, type_name):
        assert DialectCapabilities().is_character_type(type_name)

    @pytest.mark.parametrize("type_name", ["int4", "timestamp", "_text", None, ""])
    def test_non_character_types(self, type_name):
        assert not DialectCapabilities().is_character_type(type_name)

    def test_strict(self):
        assert DialectCapabilities.strict().arbitrary_default_expressions is False

    def test_hashable(self):
        assert hash(DialectCapabilities()) == hash(DialectCapabilities())
        custom = DialectCapabilities(function_defaults={"now": "NOW()"})
        assert {DialectCapabilities(), custom}
        assert custom != DialectCapabilities()

    def test_function_defaults_read_only(self):
        capabilities = DialectCapabilities()
        with pytest.raises(TypeError):
            capabilities.function_defaults["now"] = "clock_timestamp()"


# ============================================================================
# CONNECTION
# ============================================================================

class TestConnectionDefaults:

    def test_url_wins(self):
        settings = ConnectionDefaults(url="postgresql://u:p@h/db", host="other")
        assert settings.conninfo == "postgresql://u:p@h/db"

    def test_components_are_quoted(self):
        settings = ConnectionDefaults(user="app", password="p@ss/word", host="db", database="app")
        assert settings.conninfo.startswith("postgresql://app:p%40ss%2Fword@db:5432/app?")

    def test_safe_conninfo_hides_credentials(self):
        settings = ConnectionDefaults(user="app", password="secret", host="db")
        assert "secret" not in settings.safe_conninfo
        assert settings.safe_conninfo.startswith("db:5432/postgres")

    def test_from_env(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.setenv("POSTGRES_HOST", "pg.internal")
        monkeypatch.setenv("POSTGRES_PORT", "6543")
        settings = ConnectionDefaults.from_env()
        assert settings.host == "pg.internal"
        assert settings.port == 6543
        assert settings.url is None


# ============================================================================
# INDEX NAMING
# ============================================================================

class TestIndexNaming:

    def test_plain(self):
        assert IndexNamingDefaults().index_name("users", ["email"]) == "idx_users_email"

    def test_unique_strips_schema(self):
        assert IndexNamingDefaults().index_name("crm.users", ["a", "b"], unique=True) == "idx_unique_users_a_b"

    def test_truncated(self):
        name = IndexNamingDefaults().index_name("t" * 40, ["c" * 40])
        assert len(name) == 63

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("INDEX_NAME_PREFIX", "ix")
        assert IndexNamingDefaults.from_env().index_name("users", ["email"]) == "ix_users_email"


class TestGlobalDefaults:

    def test_cached_until_reset(self):
        reset_defaults()
        first = get_defaults()
        assert get_defaults() is first
        reset_defaults()
        assert get_defaults() is not first


# ============================================================================
# LOGGING
# ============================================================================

def _record(message="Reading indexes"):
    return logging.LogRecord("repositories.index_repo", logging.INFO, __file__, 10, message, None, None)


class TestLogContext:

    def test_nested_context_merges(self):
        with log_context(schema="crm", table="users"):
            with log_context(index="users_email_idx"):
                context = get_current_context()
                assert context.schema == "crm"
                assert context.table == "users"
                assert context.index == "users_email_idx"
            assert get_current_context().index is None
        assert get_current_context().table is None

    def test_structured_formatter(self):
        with log_context(table="users", operation="indexes"):
            output = json.loads(StructuredFormatter().format(_record()))
        assert output["message"] == "Reading indexes"
        assert output["level"] == "INFO"
        assert output["context"] == {"table": "users", "operation": "indexes"}

    def test_human_formatter(self):
        with log_context(schema="crm", table="users"):
            output = HumanFormatter().format(_record())
        assert "[schema=crm, table=users]" in output
        assert output.endswith("Reading indexes")
