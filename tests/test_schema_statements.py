# ============================================================================
# SCHEMA STATEMENTS SERVICE TESTS
# ============================================================================
# STATUS: Tests - DDL execution service
# PURPOSE: Verify executed DDL, pre-SQL validation and error classification
# CREATED: 19 OCT 2026
# ============================================================================
"""
Schema Statements Service Tests

Unit tests for services.schema_statements with FakeConnection and
MagicMock classifiers.

Run with:
    pytest tests/test_schema_statements.py -v
"""

import psycopg
import pytest
from unittest.mock import MagicMock

from conftest import FakeConnection, column
from core.config.defaults import IndexNamingDefaults
from core.contracts import DefaultFunction
from core.errors import ConflictingIndexOptions, InvalidDefaultExpression, MissingIndexTarget
from services.schema_statements import SchemaStatements, reraise


# ============================================================================
# HELPERS
# ============================================================================

class DuplicateIndex(Exception):
    """Translated error raised by a test classifier."""


def _statements(execute_error=None, classifier=None):
    conn = FakeConnection(
        columns={"users": [column("name", "varchar"), column("age", "int4")]},
        execute_error=execute_error,
    )
    service = SchemaStatements(conn, naming=IndexNamingDefaults(), exception_classifier=classifier)
    return service, conn


# ============================================================================
# ADD INDEX
# ============================================================================

class TestAddIndex:

    def test_executes_statement(self):
        service, conn = _statements()
        service.add_index("users", "email", unique=True)
        assert conn.executed == ['CREATE UNIQUE INDEX "idx_unique_users_email" ON "users" ("email")']

    def test_returns_statement(self):
        service, conn = _statements()
        stmt = service.add_index("users", ["name"], {"name": "ix_name"})
        assert stmt.as_string(None) == conn.executed[0]

    def test_case_insensitive_uses_column_types(self):
        service, conn = _statements()
        service.add_index("users", ["name", "age"], case_sensitive=False)
        assert conn.column_calls == ["users"]
        assert conn.executed == ['CREATE INDEX "idx_users_name_age" ON "users" (LOWER("name"), "age")']

    def test_case_sensitive_skips_column_lookup(self):
        service, conn = _statements()
        service.add_index("users", "name")
        assert conn.column_calls == []

    def test_missing_target_before_any_sql(self):
        service, conn = _statements()
        with pytest.raises(MissingIndexTarget):
            service.add_index("users", [], case_sensitive=False)
        assert conn.column_calls == []
        assert conn.executed == []

    def test_conflicting_options_before_any_sql(self):
        service, conn = _statements()
        with pytest.raises(ConflictingIndexOptions):
            service.add_index("users", expression="lower(name)", name="ix", case_sensitive=False)
        assert conn.executed == []

    def test_keywords_override_options(self):
        service, conn = _statements()
        service.add_index("users", "email", {"unique": False}, unique=True)
        assert conn.executed[0].startswith("CREATE UNIQUE INDEX")


# ============================================================================
# EXCEPTION CLASSIFIER
# ============================================================================

class TestExceptionClassifier:

    def test_default_reraises_database_error(self):
        error = psycopg.errors.DuplicateTable("relation already exists")
        service, _ = _statements(execute_error=error)
        with pytest.raises(psycopg.errors.DuplicateTable) as exc_info:
            service.add_index("users", "email")
        assert exc_info.value is error

    def test_classifier_receives_request(self):
        error = psycopg.errors.DuplicateTable("relation already exists")
        classifier = MagicMock(side_effect=DuplicateIndex("idx exists"))
        service, conn = _statements(execute_error=error, classifier=classifier)

        with pytest.raises(DuplicateIndex):
            service.add_index("users", "email", unique=True)

        classifier.assert_called_once()
        args = classifier.call_args[0]
        assert args[0] is conn
        assert args[1] == "users"
        assert args[2] == ["email"]
        assert args[3] == {"unique": True}
        assert args[4] is error

    def test_classifier_returning_swallows_error(self):
        error = psycopg.errors.DuplicateTable("relation already exists")
        skipped = []

        def skip_existing(connection, table, column_names, options, raw_error):
            skipped.append((table, column_names, raw_error))

        service, conn = _statements(execute_error=error, classifier=skip_existing)
        statement = service.add_index("users", "email")

        assert statement.as_string(None) == 'CREATE INDEX "idx_users_email" ON "users" ("email")'
        assert conn.executed == [statement.as_string(None)]
        assert skipped == [("users", ["email"], error)]

    def test_classifier_not_called_for_validation_errors(self):
        classifier = MagicMock()
        service, _ = _statements(classifier=classifier)
        with pytest.raises(MissingIndexTarget):
            service.add_index("users")
        classifier.assert_not_called()

    def test_reraise(self):
        error = RuntimeError("boom")
        with pytest.raises(RuntimeError):
            reraise(MagicMock(), "users", [], {}, error)


# ============================================================================
# ENUMS
# ============================================================================

class TestEnumStatements:

    def test_create_alter_drop(self):
        service, conn = _statements()
        service.create_enum("mood", ["sad", "ok"])
        service.alter_enum("mood", "happy", after="ok")
        service.drop_enum("mood")
        assert conn.executed == [
            "CREATE TYPE \"public\".\"mood\" AS ENUM ('sad','ok')",
            "ALTER TYPE \"public\".\"mood\" ADD VALUE 'happy' AFTER 'ok'",
            'DROP TYPE "public"."mood"',
        ]

    def test_enum_errors_propagate(self):
        error = psycopg.errors.DuplicateObject("type already exists")
        service, _ = _statements(execute_error=error)
        with pytest.raises(psycopg.errors.DuplicateObject):
            service.create_enum("mood", ["sad"])


# ============================================================================
# COLUMN DEFAULTS
# ============================================================================

class TestColumnDefaults:

    def test_add_column_expression_default(self):
        service, conn = _statements()
        service.add_column("users", "created_at", "timestamptz",
                           {"default": {"expr": "now()"}, "null": False})
        assert conn.executed == [
            'ALTER TABLE "users" ADD COLUMN "created_at" timestamptz DEFAULT now() NOT NULL'
        ]

    def test_add_column_symbolic_default(self):
        service, conn = _statements()
        service.add_column("users", "created_on", "date", {"default": DefaultFunction.CURRENT_DATE})
        assert conn.executed[0].endswith("date DEFAULT CURRENT_DATE")

    def test_add_column_literal_default(self):
        service, conn = _statements()
        service.add_column("users", "state", "text", {"default": "active", "null": False})
        assert conn.executed == [
            "ALTER TABLE \"users\" ADD COLUMN \"state\" text DEFAULT 'active' NOT NULL"
        ]

    def test_add_column_plain(self):
        service, conn = _statements()
        service.add_column("crm.users", "nickname", "text")
        assert conn.executed == ['ALTER TABLE "crm"."users" ADD COLUMN "nickname" text']

    def test_add_column_invalid_expression(self):
        service, conn = _statements()
        with pytest.raises(InvalidDefaultExpression):
            service.add_column("users", "x", "text", {"default": {"expr": ""}})
        assert conn.executed == []

    def test_change_default_expression(self):
        service, conn = _statements()
        service.change_column_default("users", "created_at", {"expr": "now()"})
        assert conn.executed == ['ALTER TABLE "users" ALTER COLUMN "created_at" SET DEFAULT now()']

    def test_change_default_literal(self):
        service, conn = _statements()
        service.change_column_default("users", "state", "inactive")
        assert conn.executed == [
            "ALTER TABLE \"users\" ALTER COLUMN \"state\" SET DEFAULT 'inactive'"
        ]

    def test_drop_default(self):
        service, conn = _statements()
        service.change_column_default("users", "state", None)
        assert conn.executed == ['ALTER TABLE "users" ALTER COLUMN "state" DROP DEFAULT']
