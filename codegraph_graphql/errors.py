"""
Error hierarchy for the GraphQL overlay.

Errors carry a code for programmatic handling and keyword context for
debugging. They are raised by the resolver, the host helper and the schema
loader; the public overlay operations never let them reach the host.
"""

from typing import Any


class GraphQLOverlayError(Exception):
    """Base exception for all overlay errors.

    Example:
        raise GraphQLOverlayError(
            code="SCHEMA_LOAD_ERROR",
            message="Failed to read schema",
            path="schema.graphql",
        )
    """

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(f"[{code}] {message}")

    def __repr__(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r}, {ctx_str})"


# ==============================================================================
# Mapping Errors
# ==============================================================================


class PositionOutOfRangeError(GraphQLOverlayError):
    """Offset has no segment in the template's segment table."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(code="POSITION_OUT_OF_RANGE", message=message, **context)


class TemplateResolutionError(GraphQLOverlayError):
    """Interpolation cannot be resolved to a static document."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(code="TEMPLATE_RESOLUTION_ERROR", message=message, **context)


# ==============================================================================
# Host Errors
# ==============================================================================


class SourceNotFoundError(GraphQLOverlayError):
    """Host has no source for the requested file."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(code="SOURCE_NOT_FOUND", message=message, **context)


class LanguageNotSupportedError(GraphQLOverlayError):
    """No tree-sitter grammar for the requested language."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(code="LANGUAGE_NOT_SUPPORTED", message=message, **context)


# ==============================================================================
# Schema Errors
# ==============================================================================


class SchemaLoadError(GraphQLOverlayError):
    """Schema file missing or not a valid SDL / introspection result."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(code="SCHEMA_LOAD_ERROR", message=message, **context)


__all__ = [
    "GraphQLOverlayError",
    "PositionOutOfRangeError",
    "TemplateResolutionError",
    "SourceNotFoundError",
    "LanguageNotSupportedError",
    "SchemaLoadError",
]
