"""
Host tree collaborator.

`ScriptSourceHelper` is the port the overlay uses to reach the host's source
tree; `TreeSitterSourceHelper` is the tree-sitter backed implementation.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Protocol, runtime_checkable

from tree_sitter import Node as TSNode

from codegraph_graphql.errors import SourceNotFoundError
from codegraph_graphql.models import LineAndCharacter
from codegraph_graphql.parsing.ast_tree import AstTree
from codegraph_graphql.parsing.parser_registry import DEFAULT_LANGUAGE, get_registry
from codegraph_graphql.parsing.source_file import SourceFile


@runtime_checkable
class ScriptSourceHelper(Protocol):
    """
    Access to the host's parsed sources.

    All positions are character offsets into the outer source text.
    """

    def get_node(self, file_name: str, position: int) -> TSNode | None:
        """Smallest node whose [start, end) contains position"""
        ...

    def get_all_nodes(self, file_name: str, condition: Callable[[TSNode], bool]) -> list[TSNode]:
        """Every node satisfying condition, depth-first source order"""
        ...

    def get_line_and_char(self, file_name: str, position: int) -> LineAndCharacter:
        """Outer offset to zero-based line/character"""
        ...

    def get_source_text(self, file_name: str) -> str:
        """Raw outer source text"""
        ...

    def get_node_span(self, file_name: str, node: TSNode) -> tuple[int, int]:
        """Outer [start, end) of a node"""
        ...


class TreeSitterSourceHelper:
    """
    ScriptSourceHelper over tree-sitter parses.

    Sources are registered with `set_source`, or read from disk the first time
    a file name is queried. A file is re-parsed when its content changes.
    """

    def __init__(self, language: str | None = None):
        """
        Args:
            language: Grammar override (None: detect from file extension, default typescript)
        """
        self._language = language
        self._trees: dict[str, AstTree] = {}

    def set_source(self, file_name: str, content: str) -> AstTree:
        """Register (or replace) the content of a file"""
        current = self._trees.get(file_name)
        if current is not None and current.source.content == content:
            return current

        return self._register(SourceFile(file_path=file_name, content=content, language=self._language_for(file_name)))

    def get_tree(self, file_name: str) -> AstTree:
        """
        Parsed tree for a file.

        Raises:
            SourceNotFoundError: If the file is neither registered nor readable
        """
        tree = self._trees.get(file_name)
        if tree is not None:
            return tree

        path = Path(file_name)
        if not path.is_file():
            raise SourceNotFoundError(f"No source for {file_name}", file_name=file_name)
        return self._register(SourceFile.from_file(file_name, language=self._language_for(file_name)))

    def _language_for(self, file_name: str) -> str:
        return self._language or get_registry().detect_language(file_name) or DEFAULT_LANGUAGE

    def _register(self, source: SourceFile) -> AstTree:
        tree = AstTree.parse(source)
        self._trees[source.file_path] = tree
        return tree

    # ============================================================
    # ScriptSourceHelper
    # ============================================================

    def get_node(self, file_name: str, position: int) -> TSNode | None:
        return self.get_tree(file_name).find_smallest_node_at(position)

    def get_all_nodes(self, file_name: str, condition: Callable[[TSNode], bool]) -> list[TSNode]:
        return self.get_tree(file_name).find_all(condition)

    def get_line_and_char(self, file_name: str, position: int) -> LineAndCharacter:
        return self.get_tree(file_name).get_line_and_char(position)

    def get_source_text(self, file_name: str) -> str:
        return self.get_tree(file_name).source.content

    def get_node_span(self, file_name: str, node: TSNode) -> tuple[int, int]:
        return self.get_tree(file_name).get_span(node)
