"""
Autocomplete suggestions over a GraphQL text.

The cursor is one past the insertion point: a cursor at character N
completes text typed before character N - 1. Callers mapping a host cursor
add one before calling.
"""

from graphql import (
    GraphQLSchema,
    get_named_type,
    is_composite_type,
    is_enum_type,
)
from graphql.language import TokenKind
from graphql.type import GraphQLBoolean

from codegraph_graphql.language_service.context import DocumentWalker, fields_of, tokenize
from codegraph_graphql.language_service.types import CompletionItem, CompletionItemKind, Position
from codegraph_graphql.template.position_codec import line_and_char_to_offset

DEFINITION_KEYWORDS = ("query", "mutation", "subscription", "fragment", "{")
TYPENAME_FIELD = "__typename"


def get_autocomplete_suggestions(
    schema: GraphQLSchema,
    text: str,
    cursor: Position,
) -> list[CompletionItem]:
    """
    Suggestions at a cursor, in ranking order.

    Args:
        schema: Schema to complete against
        text: GraphQL document text (may be incomplete)
        cursor: One past the insertion point

    Returns:
        Completion items, empty when the context is unknown
    """
    insertion = min(max(line_and_char_to_offset(text, cursor) - 1, 0), len(text))

    tokens = tokenize(text[:insertion])
    if tokens is None:
        return []

    prefix = ""
    if tokens and tokens[-1].kind == TokenKind.NAME and tokens[-1].end == insertion:
        prefix = tokens.pop().value

    walker = DocumentWalker(schema).feed_all(tokens)
    return [item for item in _suggest(schema, walker) if item.label.lower().startswith(prefix.lower())]


def _suggest(schema: GraphQLSchema, walker: DocumentWalker) -> list[CompletionItem]:
    if walker.in_arguments:
        return _suggest_arguments(walker)

    if walker.previous_is(TokenKind.NAME, "on"):
        return [
            CompletionItem(label=name, kind=CompletionItemKind.CLASS, documentation=type_.description)
            for name, type_ in schema.type_map.items()
            if is_composite_type(type_) and not name.startswith("__")
        ]

    if walker.in_selection_set:
        if walker.previous_is(TokenKind.SPREAD) or walker.previous_is(TokenKind.AT):
            return []
        return _suggest_fields(walker)

    if walker.previous is None or walker.previous_is(TokenKind.BRACE_R):
        return [CompletionItem(label=keyword, kind=CompletionItemKind.KEYWORD) for keyword in DEFINITION_KEYWORDS]

    return []


def _suggest_fields(walker: DocumentWalker) -> list[CompletionItem]:
    parent_type = walker.parent_type
    if parent_type is None:
        return []

    items = [
        CompletionItem(
            label=name,
            kind=CompletionItemKind.FIELD,
            detail=str(field.type),
            documentation=field.description,
            is_deprecated=field.deprecation_reason is not None,
        )
        for name, field in fields_of(parent_type).items()
    ]
    items.append(
        CompletionItem(
            label=TYPENAME_FIELD,
            kind=CompletionItemKind.FIELD,
            detail="String!",
            documentation="The name of the current Object type at runtime.",
        )
    )
    return items


def _suggest_arguments(walker: DocumentWalker) -> list[CompletionItem]:
    field = walker.arguments_field
    if field is None:
        return []

    # `name: |` completes the argument's value
    if walker.previous_is(TokenKind.COLON):
        return _suggest_values(walker)

    if walker.previous_is(TokenKind.PAREN_L) or walker.previous_is(TokenKind.NAME) or _ends_value(walker):
        return [
            CompletionItem(
                label=name,
                kind=CompletionItemKind.VARIABLE,
                detail=str(argument.type),
                documentation=argument.description,
                is_deprecated=argument.deprecation_reason is not None,
            )
            for name, argument in field.args.items()
        ]
    return []


def _suggest_values(walker: DocumentWalker) -> list[CompletionItem]:
    argument = walker.argument(walker.argument_name) if walker.argument_name else None
    if argument is None:
        return []

    named = get_named_type(argument.type)
    if is_enum_type(named):
        return [
            CompletionItem(
                label=name,
                kind=CompletionItemKind.ENUM_MEMBER,
                detail=str(named),
                documentation=value.description,
                is_deprecated=value.deprecation_reason is not None,
            )
            for name, value in named.values.items()
        ]
    if named is GraphQLBoolean:
        return [CompletionItem(label=label, kind=CompletionItemKind.VALUE) for label in ("true", "false")]
    return []


def _ends_value(walker: DocumentWalker) -> bool:
    return walker.previous is not None and walker.previous.kind in (
        TokenKind.INT,
        TokenKind.FLOAT,
        TokenKind.STRING,
        TokenKind.BLOCK_STRING,
        TokenKind.BRACKET_R,
        TokenKind.BRACE_R,
    )
