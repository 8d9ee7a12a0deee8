"""
AST Tree wrapper for Tree-sitter
"""

import bisect
from collections.abc import Callable

from tree_sitter import Node as TSNode
from tree_sitter import Tree as TSTree

from codegraph_graphql.errors import LanguageNotSupportedError
from codegraph_graphql.models import LineAndCharacter
from codegraph_graphql.parsing.parser_registry import get_registry
from codegraph_graphql.parsing.source_file import SourceFile

MAX_DEPTH = 10000


class AstTree:
    """
    Wrapper for Tree-sitter AST.

    Exposes nodes together with character-based spans of the source.
    """

    def __init__(self, source: SourceFile, tree: TSTree):
        """
        Initialize AST tree.

        Args:
            source: Source file
            tree: Tree-sitter tree
        """
        self.source = source
        self.tree = tree
        self._root = tree.root_node
        self._line_starts: list[int] | None = None

    @classmethod
    def parse(cls, source: SourceFile) -> "AstTree":
        """
        Parse source file into AST.

        Raises:
            LanguageNotSupportedError: If no grammar is registered for the language
        """
        parser = get_registry().get_parser(source.language)

        if parser is None:
            raise LanguageNotSupportedError(
                f"Language not supported: {source.language}", file_path=source.file_path
            )

        return cls(source, parser.parse(source.encoded))

    @property
    def root(self) -> TSNode:
        """Get root node"""
        return self._root

    def walk(self, node: TSNode | None = None, _depth: int = 0) -> list[TSNode]:
        """
        Walk AST in depth-first source order.

        Raises:
            RecursionError: If nesting depth exceeds MAX_DEPTH
        """
        if _depth > MAX_DEPTH:
            raise RecursionError(f"AST walk() exceeded maximum depth of {MAX_DEPTH}")

        if node is None:
            node = self._root

        nodes = [node]
        for child in node.children:
            nodes.extend(self.walk(child, _depth + 1))
        return nodes

    def find_all(self, condition: Callable[[TSNode], bool]) -> list[TSNode]:
        """All nodes satisfying the condition, depth-first"""
        return [node for node in self.walk() if condition(node)]

    def find_smallest_node_at(self, position: int) -> TSNode | None:
        """
        Find the deepest node whose [start, end) contains the character offset.

        Anonymous tokens are visited too, so a position on a template's
        backtick or on `${` resolves to that token.
        """
        if position < 0 or position >= len(self.source.content):
            return None

        byte_offset = self.source.char_to_byte(position)
        node = self._root

        while True:
            for child in node.children:
                if child.start_byte <= byte_offset < child.end_byte:
                    node = child
                    break
            else:
                return node

    def get_text(self, node: TSNode) -> str:
        """Text content of a node"""
        return self.source.encoded[node.start_byte : node.end_byte].decode(self.source.encoding)

    def get_span(self, node: TSNode) -> tuple[int, int]:
        """Character span [start, end) of a node"""
        return self.source.byte_to_char(node.start_byte), self.source.byte_to_char(node.end_byte)

    def get_line_and_char(self, position: int) -> LineAndCharacter:
        """Convert a character offset to a zero-based line/character"""
        if self._line_starts is None:
            starts = [0]
            for index, char in enumerate(self.source.content):
                if char == "\n":
                    starts.append(index + 1)
            self._line_starts = starts

        line = max(bisect.bisect_right(self._line_starts, position) - 1, 0)
        return LineAndCharacter(line=line, character=position - self._line_starts[line])

    def has_error(self, node: TSNode | None = None) -> bool:
        """Check if AST has any error nodes"""
        if node is None:
            node = self._root

        if node.type == "ERROR" or node.is_missing:
            return True

        return any(self.has_error(child) for child in node.children)

    def __repr__(self) -> str:
        return f"AstTree(file={self.source.file_path}, language={self.source.language})"
