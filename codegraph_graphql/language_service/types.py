"""
Language service types.

Kinds and severities use LSP numbering. Positions are zero-based
line/character coordinates in the GraphQL text.
"""

from dataclasses import dataclass
from enum import IntEnum

from codegraph_graphql.models import LineAndCharacter

Position = LineAndCharacter


class CompletionItemKind(IntEnum):
    TEXT = 1
    METHOD = 2
    FUNCTION = 3
    CONSTRUCTOR = 4
    FIELD = 5
    VARIABLE = 6
    CLASS = 7
    INTERFACE = 8
    MODULE = 9
    PROPERTY = 10
    UNIT = 11
    VALUE = 12
    ENUM = 13
    KEYWORD = 14
    SNIPPET = 15
    COLOR = 16
    FILE = 17
    REFERENCE = 18
    FOLDER = 19
    ENUM_MEMBER = 20
    CONSTANT = 21
    STRUCT = 22
    EVENT = 23
    OPERATOR = 24
    TYPE_PARAMETER = 25


class DiagnosticSeverity(IntEnum):
    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4


@dataclass(frozen=True, slots=True)
class Range:
    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class CompletionItem:
    """
    Completion suggestion.

    Attributes:
        label: Text to insert
        kind: Semantic kind (None when unknown)
        detail: Type of the suggested field or argument
        documentation: Schema description
        is_deprecated: Deprecated schema element
    """

    label: str
    kind: CompletionItemKind | None = None
    detail: str | None = None
    documentation: str | None = None
    is_deprecated: bool = False


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """
    Diagnostic over a GraphQL text.

    `range.end` is one unit past the exclusive end of the offending node.
    """

    range: Range
    severity: DiagnosticSeverity
    message: str
    code: int | None = None
    source: str = "GraphQL: Validation"
