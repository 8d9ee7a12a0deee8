"""
Host adapter

- diagnostic_translator: combined-text diagnostics to outer diagnostics
- overlay: completion, diagnostics and hover with delegate fallback
- factory: adapter construction from settings
"""

from .diagnostic_translator import (
    GENERIC_DIAGNOSTIC_CODE,
    DiagnosticTranslator,
    too_complex_diagnostic,
    translate_diagnostic,
)
from .factory import create_adapter
from .overlay import (
    GraphQLLanguageServiceAdapter,
    OverlayDecision,
    OverlayDecisionKind,
    translate_completion_items,
)

__all__ = [
    "GENERIC_DIAGNOSTIC_CODE",
    "DiagnosticTranslator",
    "too_complex_diagnostic",
    "translate_diagnostic",
    "create_adapter",
    "GraphQLLanguageServiceAdapter",
    "OverlayDecision",
    "OverlayDecisionKind",
    "translate_completion_items",
]
