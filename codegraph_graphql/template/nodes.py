"""
Template node kinds.

Host positions land on one of four template parts; every part normalizes to
the canonical `template_string` node, which is what the rest of the package
works with.

    gql`query { ${Fragment} hero }`
       ^^^^^^^^^^                  HEAD   (backtick, text, `${`)
                           ^^^^^^^^ TAIL   (`}`, text, backtick)
    gql`{ hero }`                  LITERAL (no substitutions)
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from tree_sitter import Node as TSNode

TEMPLATE_STRING = "template_string"
TEMPLATE_SUBSTITUTION = "template_substitution"

# Tokens that make up the literal text of a template
FRAGMENT_TOKEN_TYPES = frozenset(["`", "string_fragment", "escape_sequence"])

# Punctuation of a substitution, owned by the neighbouring literal parts
SUBSTITUTION_PUNCTUATION = frozenset(["${", "}"])


class TemplatePartKind(str, Enum):
    LITERAL = "literal"
    HEAD = "head"
    MIDDLE = "middle"
    TAIL = "tail"


@dataclass(frozen=True, slots=True)
class TemplatePart:
    """
    Template part found at a position.

    Attributes:
        kind: Which part the position is on
        root: Canonical template node
    """

    kind: TemplatePartKind
    root: TSNode


def is_template_node(node: TSNode) -> bool:
    """Check if node is a canonical template node"""
    return node.type == TEMPLATE_STRING


def substitutions_of(node: TSNode) -> list[TSNode]:
    """Substitution children of a template, in source order"""
    return [child for child in node.children if child.type == TEMPLATE_SUBSTITUTION]


def normalize_template_root(found: TSNode) -> TSNode | None:
    """
    Walk from the node at a position up to its canonical template node.

    Returns:
        template_string node, or None if found is not part of a template's
        literal text (expressions inside `${...}` are not)
    """
    if found.type == TEMPLATE_STRING:
        return found

    parent = found.parent
    if parent is None:
        return None

    if found.type in FRAGMENT_TOKEN_TYPES and parent.type == TEMPLATE_STRING:
        return parent

    if found.type in SUBSTITUTION_PUNCTUATION and parent.type == TEMPLATE_SUBSTITUTION:
        grandparent = parent.parent
        if grandparent is not None and grandparent.type == TEMPLATE_STRING:
            return grandparent

    return None


def locate_template_part(
    found: TSNode,
    position: int,
    span_of: Callable[[TSNode], tuple[int, int]],
) -> TemplatePart | None:
    """
    Classify the node at a position into a template part.

    Args:
        found: Smallest node at position
        position: Outer offset
        span_of: Outer [start, end) of a node

    Returns:
        TemplatePart, or None when position is not on a template's literal text
    """
    root = normalize_template_root(found)
    if root is None:
        return None

    spans = [span_of(sub) for sub in substitutions_of(root)]
    if not spans:
        return TemplatePart(TemplatePartKind.LITERAL, root)

    # `}` belongs to the part after a substitution, `${` to the part before it
    preceded = any(position >= end - 1 for _, end in spans)
    followed = any(position < start + 2 for start, _ in spans)

    if not preceded:
        kind = TemplatePartKind.HEAD
    elif not followed:
        kind = TemplatePartKind.TAIL
    else:
        kind = TemplatePartKind.MIDDLE
    return TemplatePart(kind, root)
