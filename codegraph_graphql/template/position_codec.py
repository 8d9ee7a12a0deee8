"""
Offset <-> line/character conversion.

Works on either coordinate space: pass the outer source text or a template's
combined text. Lines are separated by linefeed only.
"""

from codegraph_graphql.errors import PositionOutOfRangeError
from codegraph_graphql.models import LineAndCharacter


def offset_to_line_and_char(text: str, offset: int) -> LineAndCharacter:
    """
    Convert an offset to a zero-based line/character.

    Offsets past the end of text stay on the last line.
    """
    if offset < 0:
        raise PositionOutOfRangeError(f"Negative offset {offset}", offset=offset)

    line = text.count("\n", 0, offset)
    line_start = text.rfind("\n", 0, offset) + 1
    return LineAndCharacter(line=line, character=offset - line_start)


def line_and_char_to_offset(text: str, location: LineAndCharacter) -> int:
    """
    Convert a zero-based line/character to an offset.

    The character is not clamped to the line's length.

    Raises:
        PositionOutOfRangeError: If the line does not exist
    """
    if location.line < 0 or location.character < 0:
        raise PositionOutOfRangeError("Negative coordinate", line=location.line, character=location.character)

    line_start = 0
    for _ in range(location.line):
        newline = text.find("\n", line_start)
        if newline == -1:
            raise PositionOutOfRangeError(
                f"Line {location.line} is beyond the end of text", line=location.line, text_length=len(text)
            )
        line_start = newline + 1
    return line_start + location.character


def compare(a: LineAndCharacter, b: LineAndCharacter) -> int:
    """-1, 0 or 1 as a is before, at or after b"""
    if a.line != b.line:
        return -1 if a.line < b.line else 1
    if a.character != b.character:
        return -1 if a.character < b.character else 1
    return 0
