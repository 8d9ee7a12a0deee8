"""
Hover text over a GraphQL text.

The cursor is one past the character of interest, matching completion.
"""

from graphql import GraphQLNamedType, GraphQLSchema
from graphql.language import TokenKind

from codegraph_graphql.language_service.context import DocumentWalker, fields_of, tokenize
from codegraph_graphql.language_service.types import Position
from codegraph_graphql.template.position_codec import line_and_char_to_offset


def get_hover_information(schema: GraphQLSchema, text: str, cursor: Position) -> str | None:
    """
    Hover text for the name under the cursor.

    Returns:
        Markdown-free text, or None when nothing is known about the position
    """
    offset = min(max(line_and_char_to_offset(text, cursor) - 1, 0), len(text))

    tokens = tokenize(text)
    if tokens is None:
        return None

    index = next(
        (i for i, token in enumerate(tokens) if token.start <= offset < token.end),
        None,
    )
    if index is None or tokens[index].kind != TokenKind.NAME:
        return None

    walker = DocumentWalker(schema).feed_all(tokens[:index])
    name = tokens[index].value

    if walker.in_arguments:
        if walker.previous_in(TokenKind.COLON, TokenKind.DOLLAR):
            return None
        argument = walker.argument(name)
        if argument is None:
            return None
        return _with_description(f"{walker.arguments_field_name}({name}: {argument.type})", argument.description)

    if walker.previous_in(TokenKind.SPREAD, TokenKind.AT):
        return None

    if walker.previous_is(TokenKind.NAME, "on") or not walker.in_selection_set:
        type_ = schema.get_type(name)
        return _describe_type(type_) if type_ is not None else None

    parent_type = walker.parent_type
    field = fields_of(parent_type).get(name)
    if field is None or parent_type is None:
        return None
    return _with_description(f"{parent_type.name}.{name}: {field.type}", field.description)


def _describe_type(type_: GraphQLNamedType) -> str:
    return _with_description(type_.name, type_.description)


def _with_description(signature: str, description: str | None) -> str:
    if description:
        return f"{signature}\n\n{description}"
    return signature
