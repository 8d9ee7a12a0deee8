"""
GraphQL language service.

Schema-aware completion, diagnostics and hover over a plain GraphQL text,
built on graphql-core.
"""

from .completion import get_autocomplete_suggestions
from .diagnostics import get_diagnostics
from .hover import get_hover_information
from .types import (
    CompletionItem,
    CompletionItemKind,
    Diagnostic,
    DiagnosticSeverity,
    Position,
    Range,
)

__all__ = [
    "get_autocomplete_suggestions",
    "get_diagnostics",
    "get_hover_information",
    "CompletionItem",
    "CompletionItemKind",
    "Diagnostic",
    "DiagnosticSeverity",
    "Position",
    "Range",
]
