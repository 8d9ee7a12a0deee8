"""
Template Layer

Everything about GraphQL documents embedded in template strings:
- nodes: template part kinds and normalization to the template node
- tag_matcher: tag condition predicate
- position_codec: offset <-> line/character
- resolver: combined text and segment table
"""

from .nodes import TemplatePart, TemplatePartKind, is_template_node, locate_template_part
from .position_codec import compare, line_and_char_to_offset, offset_to_line_and_char
from .resolver import (
    ResolvedTemplateInfo,
    Segment,
    SegmentOrigin,
    SourcePosition,
    TemplateResolver,
)
from .tag_matcher import TagCondition, get_tag_name, is_tagged

__all__ = [
    "TemplatePart",
    "TemplatePartKind",
    "is_template_node",
    "locate_template_part",
    "compare",
    "line_and_char_to_offset",
    "offset_to_line_and_char",
    "ResolvedTemplateInfo",
    "Segment",
    "SegmentOrigin",
    "SourcePosition",
    "TemplateResolver",
    "TagCondition",
    "get_tag_name",
    "is_tagged",
]
