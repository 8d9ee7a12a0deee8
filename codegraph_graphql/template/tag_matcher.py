"""
Tag matching for template nodes.
"""

from collections.abc import Set

from tree_sitter import Node as TSNode

# Single tag name, or a set of allowed tag names
TagCondition = str | Set[str]

CALL_EXPRESSION = "call_expression"
CALLEE_TYPES = frozenset(["identifier", "member_expression"])


def get_tag_name(node: TSNode) -> str | None:
    """
    Name of the tag directly wrapping a template.

    `gql\\`...\\`` gives "gql", `graphql.gql\\`...\\`` gives "graphql.gql".
    Templates passed as call arguments (`gql(\\`...\\`)`) are not tagged.
    """
    parent = node.parent
    if parent is None or parent.type != CALL_EXPRESSION:
        return None

    arguments = parent.child_by_field_name("arguments")
    if arguments is None or arguments != node:
        return None

    callee = parent.child_by_field_name("function")
    if callee is None or callee.type not in CALLEE_TYPES or callee.text is None:
        return None

    return "".join(callee.text.decode("utf-8", errors="replace").split())


def is_tagged(node: TSNode, condition: TagCondition) -> bool:
    """
    Check if a template node's tag satisfies the condition.

    Never raises; unknown wrapper shapes are simply not tagged.
    """
    name = get_tag_name(node)
    if name is None:
        return False
    if isinstance(condition, str):
        return name == condition
    return name in condition
