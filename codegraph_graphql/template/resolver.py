"""
Template resolution.

Builds the combined GraphQL text of a template node and the segment table
that maps positions between the outer source and the combined text.

    const Fragment = gql`fragment F on Character { name }`;
    const Query = gql`query { hero { ...F } } ${Fragment}`;

The combined text of Query is `query { hero { ...F } } fragment F on
Character { name }`. The `${Fragment}` span (11 characters) stands for 32
characters of combined text, so offsets after it drift by 21.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from tree_sitter import Node as TSNode

from codegraph_graphql.errors import PositionOutOfRangeError, TemplateResolutionError
from codegraph_graphql.models import LineAndCharacter
from codegraph_graphql.observability import get_logger
from codegraph_graphql.parsing.source_helper import ScriptSourceHelper
from codegraph_graphql.template.nodes import TEMPLATE_STRING, substitutions_of
from codegraph_graphql.template.position_codec import line_and_char_to_offset, offset_to_line_and_char

logger = get_logger(__name__)

VARIABLE_DECLARATOR = "variable_declarator"

# Wrappers around a declarator's initializer that do not change its value
TRANSPARENT_WRAPPERS = frozenset(["parenthesized_expression", "as_expression", "satisfies_expression"])


class SegmentOrigin(str, Enum):
    LITERAL = "literal"
    SUBSTITUTION = "substitution"


@dataclass(frozen=True, slots=True)
class Segment:
    """
    One row of the segment table.

    LITERAL rows have equal outer and inner lengths. SUBSTITUTION rows cover
    a whole `${...}` in the outer source and the resolved text in the
    combined text; their lengths usually differ.
    """

    outer_start: int
    outer_end: int
    inner_start: int
    inner_end: int
    origin: SegmentOrigin


@dataclass(frozen=True, slots=True)
class SourcePosition:
    """
    Inner offset mapped back to the outer source.

    Attributes:
        pos: Outer offset
        is_in_other_expression: True when the inner offset lies in
            substituted text; pos is then the start of the `${...}` span
    """

    pos: int
    is_in_other_expression: bool


@dataclass(frozen=True, slots=True)
class ResolvedTemplateInfo:
    """
    Combined text and segment table of one template node.

    Attributes:
        combined_text: GraphQL text with resolved substitutions inlined
        segments: Segment table in outer-source order
        node_start: Outer start of the template node
        node_end: Outer end of the template node
    """

    combined_text: str
    segments: tuple[Segment, ...]
    node_start: int
    node_end: int

    def get_inner_position(self, position: int) -> int:
        """
        Map an outer offset to an inner offset.

        Inside a substitution's outer span the start of its substituted text
        is returned. Offsets before the template text clamp to 0, offsets
        after it to the end of the combined text.
        """
        for segment in self.segments:
            if segment.origin is SegmentOrigin.LITERAL:
                if segment.outer_start <= position <= segment.outer_end:
                    return segment.inner_start + (position - segment.outer_start)
            elif segment.outer_start <= position < segment.outer_end:
                return segment.inner_start

        if not self.segments or position < self.segments[0].outer_start:
            return 0
        return len(self.combined_text)

    def get_source_position(self, inner_position: int, at_end: bool = False) -> SourcePosition:
        """
        Map an inner offset back to an outer offset.

        Args:
            inner_position: Offset into the combined text
            at_end: Treat inner_position as an exclusive end, so an offset on
                a segment boundary belongs to the segment before it

        Raises:
            PositionOutOfRangeError: If inner_position is outside [0, len(combined_text)]
        """
        if inner_position < 0 or inner_position > len(self.combined_text) or not self.segments:
            raise PositionOutOfRangeError(
                f"Inner position {inner_position} is out of range",
                inner_position=inner_position,
                text_length=len(self.combined_text),
            )

        segment = self._segment_at(inner_position, at_end)
        if segment.origin is SegmentOrigin.SUBSTITUTION:
            return SourcePosition(segment.outer_end if at_end else segment.outer_start, True)
        return SourcePosition(segment.outer_start + (inner_position - segment.inner_start), False)

    def _segment_at(self, inner_position: int, at_end: bool) -> Segment:
        for segment in self.segments:
            if at_end and segment.inner_start < inner_position <= segment.inner_end:
                return segment
            if not at_end and segment.inner_start <= inner_position < segment.inner_end:
                return segment
        return self.segments[0] if at_end else self.segments[-1]

    def convert_inner_position_to_location(self, inner_position: int) -> LineAndCharacter:
        """Inner offset to line/character in the combined text"""
        return offset_to_line_and_char(self.combined_text, inner_position)

    def convert_inner_location_to_position(self, location: LineAndCharacter) -> int:
        """Line/character in the combined text to inner offset"""
        return line_and_char_to_offset(self.combined_text, location)


class TemplateResolver:
    """
    Resolves template nodes of one host into combined GraphQL text.

    A substitution resolves only when it is a bare identifier declared in the
    same file with a template (tagged or not) or a string literal as its
    initializer. Anything else makes the whole template unresolvable.
    """

    def __init__(self, helper: ScriptSourceHelper):
        self._helper = helper

    def resolve(self, file_name: str, node: TSNode) -> ResolvedTemplateInfo | None:
        """
        Resolve a template node.

        Returns:
            ResolvedTemplateInfo, or None if some substitution is too complex
        """
        try:
            return self._resolve_template(file_name, node, frozenset())
        except TemplateResolutionError as e:
            logger.warning("template_unresolvable", file_name=file_name, reason=e.message, **e.context)
            return None

    def _resolve_template(
        self,
        file_name: str,
        node: TSNode,
        visiting: frozenset[tuple[int, int]],
    ) -> ResolvedTemplateInfo:
        text = self._helper.get_source_text(file_name)
        node_start, node_end = self._helper.get_node_span(file_name, node)

        key = (node_start, node_end)
        if key in visiting:
            raise TemplateResolutionError("Circular template reference", start=node_start)
        visiting = visiting | {key}

        segments: list[Segment] = []
        parts: list[str] = []
        cursor = node_start + 1
        inner = 0

        def add(outer_start: int, outer_end: int, content: str, origin: SegmentOrigin) -> None:
            nonlocal inner
            segments.append(Segment(outer_start, outer_end, inner, inner + len(content), origin))
            parts.append(content)
            inner += len(content)

        for substitution in substitutions_of(node):
            sub_start, sub_end = self._helper.get_node_span(file_name, substitution)
            add(cursor, sub_start, text[cursor:sub_start], SegmentOrigin.LITERAL)
            replacement = self._resolve_substitution(file_name, substitution, visiting)
            add(sub_start, sub_end, replacement, SegmentOrigin.SUBSTITUTION)
            cursor = sub_end

        # Unterminated templates have no closing backtick
        closing = node_end - 1 if node_end - 1 >= cursor and text[node_end - 1 : node_end] == "`" else node_end
        add(cursor, closing, text[cursor:closing], SegmentOrigin.LITERAL)

        return ResolvedTemplateInfo(
            combined_text="".join(parts),
            segments=tuple(segments),
            node_start=node_start,
            node_end=node_end,
        )

    def _resolve_substitution(
        self,
        file_name: str,
        substitution: TSNode,
        visiting: frozenset[tuple[int, int]],
    ) -> str:
        expressions = [child for child in substitution.named_children if child.type != "comment"]
        if len(expressions) != 1 or expressions[0].type != "identifier":
            raise TemplateResolutionError(
                "Expression is too complex to resolve",
                expression=self._text_of(file_name, substitution),
            )

        name = self._text_of(file_name, expressions[0])
        value = self._find_initializer(file_name, name)
        if value is None:
            raise TemplateResolutionError("Identifier has no static declaration", identifier=name)

        if value.type == "string":
            return self._text_of(file_name, value)[1:-1]

        template = self._as_template(value)
        if template is None:
            raise TemplateResolutionError("Identifier is not a GraphQL document", identifier=name)
        return self._resolve_template(file_name, template, visiting).combined_text

    def _find_initializer(self, file_name: str, name: str) -> TSNode | None:
        declarators = self._helper.get_all_nodes(file_name, self._declarator_named(file_name, name))
        for declarator in declarators:
            value = declarator.child_by_field_name("value")
            while value is not None and value.type in TRANSPARENT_WRAPPERS:
                value = value.named_children[0] if value.named_children else None
            if value is not None:
                return value
        return None

    def _declarator_named(self, file_name: str, name: str) -> Callable[[TSNode], bool]:
        def condition(node: TSNode) -> bool:
            if node.type != VARIABLE_DECLARATOR:
                return False
            declared = node.child_by_field_name("name")
            return declared is not None and declared.type == "identifier" and self._text_of(file_name, declared) == name

        return condition

    @staticmethod
    def _as_template(value: TSNode) -> TSNode | None:
        if value.type == TEMPLATE_STRING:
            return value
        if value.type == "call_expression":
            arguments = value.child_by_field_name("arguments")
            if arguments is not None and arguments.type == TEMPLATE_STRING:
                return arguments
        return None

    def _text_of(self, file_name: str, node: TSNode) -> str:
        start, end = self._helper.get_node_span(file_name, node)
        return self._helper.get_source_text(file_name)[start:end]
