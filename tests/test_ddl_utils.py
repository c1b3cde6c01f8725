# ============================================================================
# DDL BUILDER TESTS
# ============================================================================
# STATUS: Tests - Index and enum statement builders
# PURPOSE: Verify rendered DDL and argument validation
# CREATED: 19 OCT 2026
# ============================================================================
"""
DDL Builder Tests

Unit tests for core.schema.ddl_utils. Statements are rendered without a
connection (Composable.as_string(None)).

Run with:
    pytest tests/test_ddl_utils.py -v
"""

import pytest

from core.config.defaults import DialectCapabilities, IndexNamingDefaults
from core.errors import (
    ConflictingIndexOptions,
    MissingIndexTarget,
    SchemaValidationError,
)
from core.models.index import IndexOptions
from core.schema.ddl_utils import EnumBuilder, IndexBuilder, table_identifier


def _index(table, columns, options=None, **kwargs):
    return IndexBuilder.create_index(table, columns, options, **kwargs).as_string(None)


# ============================================================================
# IDENTIFIERS
# ============================================================================

class TestTableIdentifier:

    def test_bare(self):
        assert table_identifier("users").as_string(None) == '"users"'

    def test_qualified(self):
        assert table_identifier("crm.users").as_string(None) == '"crm"."users"'


# ============================================================================
# INDEX VALIDATION
# ============================================================================

class TestIndexValidation:

    def test_no_columns_no_expression(self):
        with pytest.raises(MissingIndexTarget):
            IndexBuilder.create_index("users", [], {})

    def test_none_columns_no_expression(self):
        with pytest.raises(MissingIndexTarget):
            IndexBuilder.create_index("users", None)

    def test_expression_without_name(self):
        with pytest.raises(MissingIndexTarget):
            IndexBuilder.create_index("users", [], {"expression": "lower(email)"})

    def test_expression_with_case_insensitive(self):
        with pytest.raises(ConflictingIndexOptions) as exc_info:
            IndexBuilder.create_index(
                "users", [], {"expression": "lower(email)", "name": "ix", "case_sensitive": False}
            )
        assert exc_info.value.field == "case_sensitive"

    def test_expression_with_operator_class(self):
        with pytest.raises(ConflictingIndexOptions):
            IndexBuilder.create_index(
                "users", [], {"expression": "email", "name": "ix", "operator_class": "text_pattern_ops"}
            )

    def test_partial_index_unsupported(self):
        capabilities = DialectCapabilities(name="nopartial", supports_partial_indexes=False)
        with pytest.raises(ConflictingIndexOptions):
            IndexBuilder.create_index(
                "users", "email", {"conditions": "active"}, capabilities=capabilities
            )

    def test_invalid_access_method(self):
        with pytest.raises(SchemaValidationError):
            IndexBuilder.create_index("users", "email", {"kind": "gin; DROP TABLE users"})

    def test_validation_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            IndexBuilder.create_index("users", [], {})

    def test_unknown_option_rejected(self):
        with pytest.raises(ValueError):
            IndexBuilder.create_index("users", "email", {"uniq": True})


# ============================================================================
# INDEX STATEMENTS
# ============================================================================

class TestCreateIndex:

    def test_unique_single_column(self):
        stmt = _index("users", "email", {"unique": True})
        assert stmt == 'CREATE UNIQUE INDEX "idx_unique_users_email" ON "users" ("email")'

    def test_name_is_deterministic(self):
        assert _index("users", ["a", "b"]) == _index("users", ["a", "b"])

    def test_explicit_name(self):
        stmt = _index("users", "email", {"name": "users_email_key"})
        assert stmt == 'CREATE INDEX "users_email_key" ON "users" ("email")'

    def test_multiple_columns_and_with(self):
        stmt = _index("users", "last_name", {"with": "first_name"})
        assert stmt == (
            'CREATE INDEX "idx_users_last_name_first_name" ON "users" ("last_name", "first_name")'
        )

    def test_schema_qualified_table(self):
        stmt = _index("crm.users", "email")
        assert stmt == 'CREATE INDEX "idx_users_email" ON "crm"."users" ("email")'

    def test_case_insensitive_wraps_character_columns_only(self):
        stmt = _index(
            "users", ["name", "age"], {"case_sensitive": False}, caseable_columns=["name"]
        )
        assert stmt == 'CREATE INDEX "idx_users_name_age" ON "users" (LOWER("name"), "age")'

    def test_case_sensitive_ignores_caseable_columns(self):
        stmt = _index("users", "name", caseable_columns=["name"])
        assert "LOWER" not in stmt

    def test_operator_class_broadcast(self):
        stmt = _index("users", ["name", "email"], {"operator_class": "text_pattern_ops"})
        assert stmt.endswith('("name" text_pattern_ops, "email" text_pattern_ops)')

    def test_operator_class_per_column(self):
        stmt = _index("users", ["name", "email"], {"operator_class": {"email": "varchar_pattern_ops"}})
        assert stmt.endswith('("name", "email" varchar_pattern_ops)')

    def test_order_per_column(self):
        stmt = _index("events", ["created_at", "id"], {"order": {"created_at": "DESC"}})
        assert stmt.endswith('("created_at" DESC, "id")')

    def test_order_broadcast(self):
        stmt = _index("events", ["created_at", "id"], {"order": "asc"})
        assert stmt.endswith('("created_at" ASC, "id" ASC)')

    def test_kind_and_conditions(self):
        stmt = _index("docs", "tags", {"kind": "gin", "conditions": "deleted_at IS NULL"})
        assert stmt == (
            'CREATE INDEX "idx_docs_tags" ON "docs" USING gin ("tags") WHERE (deleted_at IS NULL)'
        )

    def test_expression(self):
        stmt = _index("users", [], {"name": "ix_lower_email", "expression": "lower(email)"})
        assert stmt == 'CREATE INDEX "ix_lower_email" ON "users" (lower(email))'

    def test_expression_with_kind_and_conditions(self):
        stmt = _index(
            "docs", None,
            {"name": "ix_body", "expression": "to_tsvector('english', body)",
             "kind": "gin", "conditions": "published"},
        )
        assert stmt == (
            'CREATE INDEX "ix_body" ON "docs" USING gin '
            "(to_tsvector('english', body)) WHERE published"
        )

    def test_expression_with_clause_not_wrapped(self):
        stmt = _index("t", [], {"name": "ix", "expression": "USING gist (geom)"})
        assert stmt == 'CREATE INDEX "ix" ON "t" USING gist (geom)'

    def test_expression_word_containing_clause_is_wrapped(self):
        stmt = _index("t", [], {"name": "ix", "expression": "date_trunc('day', at_without_tz)"})
        assert stmt == 'CREATE INDEX "ix" ON "t" (date_trunc(\'day\', at_without_tz))'

    def test_options_model_accepted(self):
        options = IndexOptions(unique=True, name="ix")
        assert _index("users", "email", options).startswith('CREATE UNIQUE INDEX "ix"')

    def test_naming_override(self):
        naming = IndexNamingDefaults(prefix="ix", unique_prefix="ux")
        assert '"ux_users_email"' in _index("users", "email", {"unique": True}, naming=naming)


# ============================================================================
# ENUM STATEMENTS
# ============================================================================

class TestEnumBuilder:

    def test_create(self):
        stmt = EnumBuilder.create("color", ["red", "green"]).as_string(None)
        assert stmt == "CREATE TYPE \"public\".\"color\" AS ENUM ('red','green')"

    def test_create_in_schema_with_quote(self):
        stmt = EnumBuilder.create("phrase", ["it's"], schema="crm").as_string(None)
        assert stmt == "CREATE TYPE \"crm\".\"phrase\" AS ENUM ('it''s')"

    def test_alter_before(self):
        stmt = EnumBuilder.alter("color", "blue", before="green").as_string(None)
        assert stmt == "ALTER TYPE \"public\".\"color\" ADD VALUE 'blue' BEFORE 'green'"

    def test_alter_after(self):
        stmt = EnumBuilder.alter("color", "blue", after="red").as_string(None)
        assert stmt.endswith("ADD VALUE 'blue' AFTER 'red'")

    def test_alter_plain(self):
        stmt = EnumBuilder.alter("color", "blue").as_string(None)
        assert stmt == "ALTER TYPE \"public\".\"color\" ADD VALUE 'blue'"

    def test_alter_before_and_after_rejected(self):
        with pytest.raises(SchemaValidationError):
            EnumBuilder.alter("color", "blue", before="green", after="red")

    def test_drop(self):
        assert EnumBuilder.drop("color").as_string(None) == 'DROP TYPE "public"."color"'
