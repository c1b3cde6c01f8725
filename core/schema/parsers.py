# ============================================================================
# CATALOG TEXT PARSERS
# ============================================================================
# STATUS: Core - Fixed grammars for loosely structured catalog text
# PURPOSE: Parse pg_get_indexdef / pg_get_expr / pg_get_constraintdef output
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: split_table_name, unquote_identifier, case_insensitive_columns,
#          descending_columns, parse_foreign_key_definition, default_function
# DEPENDENCIES: re
# ============================================================================
"""
Catalog Text Parsers.

PostgreSQL reports index expressions, index definitions and constraint
definitions as text. Each routine here matches one fixed grammar; text
outside the grammar returns None (or an empty result) rather than a
partial parse.

Grammars:

    case-insensitive expression (pg_get_expr of pg_index.indexprs)
        LOWER_TERM  := "lower(" ["("] column [")::text"] ")"
        EXPRESSION  := LOWER_TERM { ", " LOWER_TERM }

    descending column (pg_get_indexdef)
        column [closing casts] [" " opclass] " DESC"

    foreign key (pg_get_constraintdef, whitespace runs collapsed first)
        "FOREIGN KEY (" cols ") REFERENCES " table "(" cols ")"
        [" MATCH " (FULL|PARTIAL|SIMPLE)]
        [" ON UPDATE " action] [" ON DELETE " action]
        [" " ("DEFERRABLE"|"NOT DEFERRABLE")
            [" " ("INITIALLY DEFERRED"|"INITIALLY IMMEDIATE")]]
        [" NOT VALID"]
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple, Union

from core.contracts import ReferentialAction


# ============================================================================
# IDENTIFIERS
# ============================================================================

def split_table_name(name: str) -> Tuple[Optional[str], str]:
    """
    Split "schema.table" into (schema, table).

    A bare name returns (None, name): the lookup then searches the
    connection's schema search path.
    """
    schema, dot, table = str(name).rpartition(".")
    if not dot:
        return None, table
    return schema, table


_QUOTED_IDENTIFIER = re.compile(r'"((?:[^"]|"")*)"')
_NAME_PART = re.compile(r'"((?:[^"]|"")*)"|([^."\s]+)')


def unquote_identifier(name: str) -> str:
    """Strip PostgreSQL identifier quoting ("a""b" -> a"b)."""
    name = name.strip()
    match = _QUOTED_IDENTIFIER.fullmatch(name)
    if match:
        return match.group(1).replace('""', '"')
    return name


def unquote_qualified_name(name: str) -> str:
    """Unquote each part of a dotted name ("crm"."Users" -> crm.Users)."""
    parts = _NAME_PART.findall(name.strip())
    return ".".join(quoted.replace('""', '"') if quoted else bare for quoted, bare in parts)


def split_column_list(text: str) -> List[str]:
    """Split a rendered column list on commas."""
    return [unquote_identifier(part) for part in re.split(r",\s*", text.strip()) if part]


# ============================================================================
# CASE-INSENSITIVE INDEX EXPRESSIONS
# ============================================================================

LOWER_TERM = r"\blower\(\(?([^)]+)(\)::text)?\)"
CASE_INSENSITIVE_EXPRESSION = re.compile(rf"\A{LOWER_TERM}(?:, {LOWER_TERM})*\Z")
_LOWER_TERM = re.compile(LOWER_TERM)


def case_insensitive_columns(expression: Optional[str]) -> Optional[List[str]]:
    """
    Columns of an expression made only of lower(<column>) terms.

    Returns None when the expression is anything else, including a mix of
    lower() terms and other expressions; such indexes stay opaque.

    >>> case_insensitive_columns("lower((email)::text), lower(name)")
    ['email', 'name']
    """
    if not expression or not CASE_INSENSITIVE_EXPRESSION.match(expression):
        return None
    return [unquote_identifier(column) for column, _cast in _LOWER_TERM.findall(expression)]


# ============================================================================
# SORT ORDER
# ============================================================================

_DESC_COLUMN = re.compile(
    r'(?:"(?P<quoted>(?:[^"]|"")+)"|(?P<bare>\w+))'
    r"(?:\)(?:::\w+)?)*"
    r"(?:\s+[\w.]+)?"
    r"\s+DESC\b"
)


def descending_columns(index_definition: Optional[str]) -> Set[str]:
    """Names rendered immediately before a DESC token in an index definition."""
    found = set()
    for match in _DESC_COLUMN.finditer(index_definition or ""):
        if match.group("quoted") is not None:
            found.add(match.group("quoted").replace('""', '"'))
        else:
            found.add(match.group("bare"))
    return found


# ============================================================================
# FOREIGN KEY DEFINITIONS
# ============================================================================

FOREIGN_KEY_DEFINITION = re.compile(
    r"^FOREIGN KEY \((?P<columns>.+?)\) "
    r"REFERENCES (?P<table>.+?) ?\((?P<references>.+?)\)"
    r"(?: MATCH (?:FULL|PARTIAL|SIMPLE))?"
    r"(?: ON UPDATE (?P<on_update>.+?))?"
    r"(?: ON DELETE (?P<on_delete>.+?))?"
    r"(?: (?P<deferrable>DEFERRABLE|NOT DEFERRABLE)"
    r"(?: (?P<initially>INITIALLY DEFERRED|INITIALLY IMMEDIATE))?)?"
    r"(?: NOT VALID)?$"
)


@dataclass(frozen=True)
class ParsedForeignKey:
    """Fields recovered from one FOREIGN KEY constraint definition."""
    column_names: List[str]
    to_table: str
    references_column_names: List[str]
    on_update: ReferentialAction
    on_delete: ReferentialAction
    deferrable: Union[bool, str]


def parse_foreign_key_definition(definition: Optional[str]) -> Optional[ParsedForeignKey]:
    """
    Parse a pg_get_constraintdef() string.

    Returns None when the text is not a foreign key definition
    (CHECK, UNIQUE, ... constraints reported through the same query).
    """
    if not definition:
        return None
    match = FOREIGN_KEY_DEFINITION.match(" ".join(definition.split()))
    if not match:
        return None

    column_names = split_column_list(match.group("columns"))
    references_column_names = split_column_list(match.group("references"))
    if len(column_names) != len(references_column_names):
        return None

    deferrable: Union[bool, str] = match.group("deferrable") == "DEFERRABLE"
    if match.group("initially") == "INITIALLY DEFERRED":
        deferrable = "initially_deferred"

    return ParsedForeignKey(
        column_names=column_names,
        to_table=unquote_qualified_name(match.group("table")),
        references_column_names=references_column_names,
        on_update=ReferentialAction.from_sql(match.group("on_update")),
        on_delete=ReferentialAction.from_sql(match.group("on_delete")),
        deferrable=deferrable,
    )


# ============================================================================
# COLUMN DEFAULTS
# ============================================================================

_CAST = r"""(?:::[\w\s".\[\]()]+)?"""
_LITERAL_DEFAULT = re.compile(
    rf"""\A(?:
        '(?:[^']|'')*'{_CAST}
      | \(?-?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?\)?{_CAST}
      | true | false
      | NULL{_CAST}
    )\Z""",
    re.VERBOSE | re.IGNORECASE,
)


def default_function(default: Optional[str]) -> Optional[str]:
    """
    The default text when it is an expression rather than a literal.

    >>> default_function("now()")
    'now()'
    >>> default_function("'active'::character varying") is None
    True
    """
    if default is None:
        return None
    text = default.strip()
    if not text or _LITERAL_DEFAULT.match(text):
        return None
    return text


__all__ = [
    "split_table_name",
    "unquote_identifier",
    "unquote_qualified_name",
    "split_column_list",
    "case_insensitive_columns",
    "descending_columns",
    "ParsedForeignKey",
    "parse_foreign_key_definition",
    "default_function",
]
