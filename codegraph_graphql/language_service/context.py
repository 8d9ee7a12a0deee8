"""
Token-level document context.

Completion and hover both need to know where in a (possibly incomplete)
document a position sits: at document level, inside a selection set of some
type, inside a field's arguments, or after `on`. The walker replays the
lexer tokens before that position and keeps just enough state to answer.
"""

from dataclasses import dataclass, field

from graphql import (
    GraphQLArgument,
    GraphQLField,
    GraphQLNamedType,
    GraphQLSchema,
    get_named_type,
    is_interface_type,
    is_object_type,
)
from graphql.error import GraphQLSyntaxError
from graphql.language import Lexer, Source, Token, TokenKind

ROOT_OPERATIONS = ("query", "mutation", "subscription")
TYPE_CONDITION_KEYWORD = "on"


def tokenize(text: str) -> list[Token] | None:
    """
    Lex a GraphQL text.

    Returns:
        Tokens without SOF/EOF/comments, or None if the text does not lex
    """
    lexer = Lexer(Source(text))
    tokens: list[Token] = []
    try:
        token = lexer.advance()
        while token.kind != TokenKind.EOF:
            tokens.append(token)
            token = lexer.advance()
    except GraphQLSyntaxError:
        return None
    return tokens


def fields_of(type_: GraphQLNamedType | None) -> dict[str, GraphQLField]:
    if type_ is not None and (is_object_type(type_) or is_interface_type(type_)):
        return type_.fields
    return {}


@dataclass
class Frame:
    """Open selection set and the type it selects from"""

    parent_type: GraphQLNamedType | None
    last_field: GraphQLField | None = None
    last_field_name: str | None = None


@dataclass
class DocumentWalker:
    """
    Replays tokens and tracks selection-set nesting.

    Braces and names inside parentheses belong to arguments (or variable
    definitions) and never open selection sets.
    """

    schema: GraphQLSchema
    stack: list[Frame] = field(default_factory=list)
    paren_depth: int = 0
    arguments_field: GraphQLField | None = None
    arguments_field_name: str | None = None
    argument_name: str | None = None
    previous: Token | None = None
    _pending_type: GraphQLNamedType | None = None
    _in_directive: bool = False

    def feed_all(self, tokens: list[Token]) -> "DocumentWalker":
        for token in tokens:
            self.feed(token)
        return self

    def feed(self, token: Token) -> None:
        kind = token.kind

        if self.paren_depth > 0:
            if kind == TokenKind.PAREN_L:
                self.paren_depth += 1
            elif kind == TokenKind.PAREN_R:
                self.paren_depth -= 1
                if self.paren_depth == 0:
                    self.arguments_field = None
            elif kind == TokenKind.NAME and self.paren_depth == 1:
                # Argument names only, not values or variables
                if not self.previous_in(TokenKind.COLON, TokenKind.DOLLAR):
                    self.argument_name = token.value
            self.previous = token
            return

        if kind == TokenKind.BRACE_L:
            parent = self._pending_type
            # Anonymous `{ ... }` operation
            if parent is None and not self.stack and (self.previous is None or self.previous_is(TokenKind.BRACE_R)):
                parent = self.schema.query_type
            self.stack.append(Frame(parent))
            self._pending_type = None
        elif kind == TokenKind.BRACE_R:
            if self.stack:
                self.stack.pop()
            self._pending_type = None
        elif kind == TokenKind.PAREN_L:
            self.paren_depth = 1
            self.argument_name = None
            if self.stack and not self._in_directive:
                self.arguments_field = self.stack[-1].last_field
                self.arguments_field_name = self.stack[-1].last_field_name
            self._in_directive = False
        elif kind == TokenKind.AT:
            self._in_directive = True
        elif kind == TokenKind.SPREAD:
            self._pending_type = None
        elif kind == TokenKind.NAME:
            self._feed_name(token)

        self.previous = token

    def _feed_name(self, token: Token) -> None:
        name = token.value
        previous = self.previous

        if self._in_directive:
            if previous is not None and previous.kind == TokenKind.AT:
                return
            self._in_directive = False

        if previous is not None and previous.kind == TokenKind.NAME and previous.value == TYPE_CONDITION_KEYWORD:
            self._pending_type = self.schema.get_type(name)
            return

        if not self.stack:
            if name in ROOT_OPERATIONS:
                self._pending_type = _root_type(self.schema, name)
            return

        if previous is not None and previous.kind == TokenKind.SPREAD:
            return

        frame = self.stack[-1]
        frame.last_field = fields_of(frame.parent_type).get(name)
        frame.last_field_name = name
        self._pending_type = get_named_type(frame.last_field.type) if frame.last_field else None

    # ============================================================
    # Queries
    # ============================================================

    @property
    def parent_type(self) -> GraphQLNamedType | None:
        """Type of the innermost open selection set"""
        return self.stack[-1].parent_type if self.stack else None

    @property
    def in_arguments(self) -> bool:
        return self.paren_depth > 0

    @property
    def in_selection_set(self) -> bool:
        return bool(self.stack) and self.paren_depth == 0

    def previous_is(self, kind: TokenKind, value: str | None = None) -> bool:
        if self.previous is None or self.previous.kind != kind:
            return False
        return value is None or self.previous.value == value

    def previous_in(self, *kinds: TokenKind) -> bool:
        return self.previous is not None and self.previous.kind in kinds

    def argument(self, name: str) -> GraphQLArgument | None:
        if self.arguments_field is None:
            return None
        return self.arguments_field.args.get(name)


def _root_type(schema: GraphQLSchema, keyword: str) -> GraphQLNamedType | None:
    return {
        "query": schema.query_type,
        "mutation": schema.mutation_type,
        "subscription": schema.subscription_type,
    }.get(keyword)
