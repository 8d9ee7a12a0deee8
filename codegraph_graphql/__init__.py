"""
codegraph-graphql

GraphQL completion, diagnostics and hover for GraphQL documents embedded in
tagged template strings of TypeScript / JavaScript sources.
"""

from .adapter import GraphQLLanguageServiceAdapter, create_adapter
from .config import OverlaySettings
from .errors import GraphQLOverlayError
from .parsing import ScriptSourceHelper, TreeSitterSourceHelper
from .schema_loader import load_schema

__version__ = "0.1.0"

__all__ = [
    "GraphQLLanguageServiceAdapter",
    "create_adapter",
    "OverlaySettings",
    "GraphQLOverlayError",
    "ScriptSourceHelper",
    "TreeSitterSourceHelper",
    "load_schema",
    "__version__",
]
