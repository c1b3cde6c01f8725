# ============================================================================
# DEFAULT EXPRESSION RESOLVER
# ============================================================================
# STATUS: Core - Expression column defaults
# PURPOSE: Resolve symbolic defaults and emit DEFAULT clauses
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: DefaultExpressionResolver, DefaultClause, build_default_clause,
#          apply_column_options
# DEPENDENCIES: psycopg
# ============================================================================
"""
Default Expression Resolver.

A column default is either a literal value (left to the caller's normal
column handling) or an expression emitted verbatim as DEFAULT <expr>.
Expressions come from an explicit {"expr": ...} default or from a
DefaultFunction token such as DefaultFunction.NOW.

Usage:
    fragment, options = apply_column_options(
        {"default": {"expr": "gen_random_uuid()"}, "null": False},
        DialectCapabilities(),
    )
    # fragment renders as ' DEFAULT gen_random_uuid() NOT NULL'
    # options == {}
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from psycopg import sql

from core.config.defaults import DialectCapabilities
from core.contracts import DefaultFunction
from core.errors import InvalidDefaultExpression
from core.logging import ComponentType, get_logger
from core.models.column import ColumnDefaultSpec

logger = get_logger(__name__, ComponentType.BUILDER)


class DefaultExpressionResolver:
    """
    Dialect-specific default expression handling.

    PostgreSQL accepts any non-empty SQL text as a default expression;
    a strict dialect accepts only its known function defaults.
    """

    def __init__(self, capabilities: Optional[DialectCapabilities] = None):
        self.capabilities = capabilities or DialectCapabilities()

    def resolve_symbolic(self, token: Any) -> Optional[str]:
        """Native SQL for a DefaultFunction token, None for anything else."""
        if isinstance(token, DefaultFunction):
            return self.capabilities.function_defaults.get(token.value)
        return None

    def validate(self, expression: Optional[str]) -> bool:
        if expression is None or not str(expression).strip():
            return False
        if self.capabilities.arbitrary_default_expressions:
            return True
        return str(expression).strip() in self.capabilities.function_defaults.values()


@dataclass(frozen=True)
class DefaultClause:
    """
    Outcome of default resolution.

    fragment is set when an expression was emitted; otherwise value and
    nullable are handed back untouched for the literal-default path.
    """
    fragment: Optional[sql.Composable] = None
    value: Any = None
    nullable: Optional[bool] = None

    @property
    def is_expression(self) -> bool:
        return self.fragment is not None


def build_default_clause(
    spec: ColumnDefaultSpec,
    capabilities: Optional[DialectCapabilities] = None,
) -> DefaultClause:
    """
    Turn a ColumnDefaultSpec into a DEFAULT clause or a literal pass-through.

    NOT NULL is appended only when nullable is explicitly False.

    Raises:
        InvalidDefaultExpression: if the dialect rejects the expression
    """
    resolver = DefaultExpressionResolver(capabilities)

    expression = None
    if spec.expression is not None:
        expression = resolver.resolve_symbolic(spec.expression)
        if expression is None:
            if isinstance(spec.expression, DefaultFunction):
                raise InvalidDefaultExpression(spec.expression.value)
            expression = spec.expression
    elif isinstance(spec.value, DefaultFunction):
        expression = resolver.resolve_symbolic(spec.value)

    if expression is None:
        return DefaultClause(value=spec.value, nullable=spec.nullable)

    if not resolver.validate(expression):
        raise InvalidDefaultExpression(expression)

    fragment = sql.SQL(" DEFAULT {}").format(sql.SQL(expression))
    if spec.nullable is False:
        fragment = sql.SQL("{} NOT NULL").format(fragment)

    logger.debug(f"Resolved default expression: {expression}")
    return DefaultClause(fragment=fragment)


def apply_column_options(
    options: Mapping[str, Any],
    capabilities: Optional[DialectCapabilities] = None,
) -> Tuple[Optional[sql.Composable], Dict[str, Any]]:
    """
    Add-column hook: split an expression default off the column options.

    Returns (fragment, remaining_options). When an expression was emitted,
    "default" and "null" are consumed; otherwise "default" holds the
    literal value for the caller's normal handling.
    """
    remaining = dict(options)
    if "default" not in options:
        return None, remaining

    clause = build_default_clause(ColumnDefaultSpec.from_options(options), capabilities)
    if clause.is_expression:
        remaining.pop("default", None)
        remaining.pop("null", None)
    else:
        remaining["default"] = clause.value
    return clause.fragment, remaining


__all__ = [
    "DefaultExpressionResolver",
    "DefaultClause",
    "build_default_clause",
    "apply_column_options",
]
