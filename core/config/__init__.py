# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the schema toolkit.
"""

from core.config.defaults import (
    DialectCapabilities,
    ConnectionDefaults,
    IndexNamingDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "DialectCapabilities",
    "ConnectionDefaults",
    "IndexNamingDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
