# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Dialect capabilities, connection settings, index naming
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides defaults for DDL generation, introspection and connectivity.
These can be overridden via environment variables or passed explicitly.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Dialect capabilities are threaded through calls, never read globally
"""

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional
from urllib.parse import quote


@dataclass(frozen=True)
class DialectCapabilities:
    """
    What the target engine accepts.

    Passed explicitly to the DDL builder and default-expression resolver.
    """
    name: str = "postgresql"

    # Arbitrary SQL is okay as a column default in PostgreSQL
    arbitrary_default_expressions: bool = True
    supports_partial_indexes: bool = True

    # Access method the engine uses when none is given
    default_index_method: str = "btree"

    # pg_type.typname values eligible for LOWER() wrapping
    character_types: FrozenSet[str] = frozenset({"bpchar", "char", "varchar", "text"})

    # Symbolic default token -> native SQL (read-only; left out of hash)
    function_defaults: Mapping[str, str] = field(hash=False, default_factory=lambda: {
        "now": "NOW()",
        "current_timestamp": "CURRENT_TIMESTAMP",
        "current_date": "CURRENT_DATE",
    })

    def __post_init__(self):
        object.__setattr__(self, "function_defaults", MappingProxyType(dict(self.function_defaults)))

    def is_character_type(self, type_name: Optional[str]) -> bool:
        """Check if a catalog type name is character-like."""
        return bool(type_name) and type_name.lower() in self.character_types

    @classmethod
    def postgresql(cls) -> "DialectCapabilities":
        return cls()

    @classmethod
    def strict(cls) -> "DialectCapabilities":
        """Capabilities of an engine that only accepts known default functions."""
        return cls(name="strict", arbitrary_default_expressions=False)


@dataclass(frozen=True)
class ConnectionDefaults:
    """
    PostgreSQL connection settings.

    DATABASE_URL wins over the individual POSTGRES_* components.
    """
    url: Optional[str] = None
    host: str = "localhost"
    port: int = 5432
    database: str = "postgres"
    user: str = "postgres"
    password: str = ""
    sslmode: str = "prefer"
    connect_timeout: int = 10
    application_name: str = "pgschema-plus"

    @property
    def conninfo(self) -> str:
        """Connection string for psycopg.connect()."""
        if self.url:
            return self.url
        auth = quote(self.user, safe="")
        if self.password:
            auth += ":" + quote(self.password, safe="")
        return (
            f"postgresql://{auth}@{self.host}:{self.port}/{self.database}"
            f"?sslmode={self.sslmode}"
            f"&connect_timeout={self.connect_timeout}"
            f"&application_name={quote(self.application_name, safe='')}"
        )

    @property
    def safe_conninfo(self) -> str:
        """Connection string with credentials removed, for logs."""
        conninfo = self.conninfo
        if "@" in conninfo:
            return conninfo.split("@")[-1]
        return conninfo

    @classmethod
    def from_env(cls) -> "ConnectionDefaults":
        """Create from environment variables."""
        return cls(
            url=os.getenv("DATABASE_URL") or None,
            host=os.getenv("POSTGRES_HOST", "localhost"),
            port=int(os.getenv("POSTGRES_PORT", 5432)),
            database=os.getenv("POSTGRES_DB", "postgres"),
            user=os.getenv("POSTGRES_USER", "postgres"),
            password=os.getenv("POSTGRES_PASSWORD", ""),
            sslmode=os.getenv("POSTGRES_SSLMODE", "prefer"),
            connect_timeout=int(os.getenv("POSTGRES_CONNECT_TIMEOUT", 10)),
            application_name=os.getenv("POSTGRES_APPLICATION_NAME", "pgschema-plus"),
        )


@dataclass(frozen=True)
class IndexNamingDefaults:
    """
    Conventions for derived index names.

    Names longer than max_identifier_length are cut, as PostgreSQL would.
    """
    prefix: str = "idx"
    unique_prefix: str = "idx_unique"
    max_identifier_length: int = 63  # NAMEDATALEN - 1

    def index_name(self, table: str, columns, unique: bool = False) -> str:
        """Generate conventional index name."""
        table = table.rpartition(".")[2]
        prefix = self.unique_prefix if unique else self.prefix
        name = f"{prefix}_{table}_{'_'.join(columns)}"
        return name[:self.max_identifier_length]

    @classmethod
    def from_env(cls) -> "IndexNamingDefaults":
        """Create from environment variables."""
        return cls(
            prefix=os.getenv("INDEX_NAME_PREFIX", "idx"),
            unique_prefix=os.getenv("UNIQUE_INDEX_NAME_PREFIX", "idx_unique"),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    dialect: DialectCapabilities = field(default_factory=DialectCapabilities)
    connection: ConnectionDefaults = field(default_factory=ConnectionDefaults)
    index_naming: IndexNamingDefaults = field(default_factory=IndexNamingDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            dialect=DialectCapabilities.postgresql(),
            connection=ConnectionDefaults.from_env(),
            index_naming=IndexNamingDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "DialectCapabilities",
    "ConnectionDefaults",
    "IndexNamingDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
