"""
Host Parsing Layer

Tree-sitter based access to TypeScript / JavaScript host sources.

Components:
- parser_registry: Language parser management
- source_file: Source file representation
- ast_tree: AST tree wrapper with character-based spans
- source_helper: ScriptSourceHelper port and its tree-sitter implementation
"""

from codegraph_graphql.parsing.ast_tree import AstTree
from codegraph_graphql.parsing.parser_registry import ParserRegistry, get_registry
from codegraph_graphql.parsing.source_file import SourceFile
from codegraph_graphql.parsing.source_helper import ScriptSourceHelper, TreeSitterSourceHelper

__all__ = [
    "ParserRegistry",
    "get_registry",
    "SourceFile",
    "AstTree",
    "ScriptSourceHelper",
    "TreeSitterSourceHelper",
]
