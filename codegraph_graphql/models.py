"""
Host-facing models.

Shapes returned to the host query surface (completion entries, diagnostics,
quick info) plus the line/character coordinate shared by both coordinate
spaces.
"""

from dataclasses import dataclass, field
from enum import IntEnum


@dataclass(frozen=True, slots=True, order=True)
class LineAndCharacter:
    """
    Zero-based line/character coordinate.

    Ordered by line first, then character.

    Attributes:
        line: Line number (0-indexed)
        character: Character offset within the line (0-indexed)
    """

    line: int
    character: int

    def less_than_or_equal_to(self, other: "LineAndCharacter") -> bool:
        """Check if this coordinate is at or before the other"""
        return self <= other


class DiagnosticCategory(IntEnum):
    """Host diagnostic category"""

    WARNING = 0
    ERROR = 1
    SUGGESTION = 2
    MESSAGE = 3


@dataclass(frozen=True, slots=True)
class HostDiagnostic:
    """
    Diagnostic anchored in the outer source.

    Attributes:
        code: Numeric diagnostic code
        category: Host category
        message_text: Single-line message
        file_name: Outer source file
        start: Outer start offset
        length: Span length in characters
    """

    code: int
    category: DiagnosticCategory
    message_text: str
    file_name: str
    start: int
    length: int


@dataclass(frozen=True, slots=True)
class CompletionEntry:
    name: str
    kind: str
    kind_modifiers: str = "declare"
    sort_text: str = "0"


@dataclass(slots=True)
class CompletionInfo:
    entries: list[CompletionEntry] = field(default_factory=list)
    is_global_completion: bool = False
    is_member_completion: bool = False
    is_new_identifier_location: bool = False


@dataclass(frozen=True, slots=True)
class TextSpan:
    start: int
    length: int


@dataclass(frozen=True, slots=True)
class DisplayPart:
    text: str
    kind: str = ""


@dataclass(slots=True)
class QuickInfo:
    """Hover result in the host's shape"""

    text_span: TextSpan
    display_parts: list[DisplayPart]
    kind: str = "string"
    kind_modifiers: str = ""
