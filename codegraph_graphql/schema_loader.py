"""
Schema loading from local files.

SDL files (.graphql, .gql, .graphqls) are built with `build_schema`.
JSON files are introspection results, either the bare `{"__schema": ...}`
object or a full response wrapped in `{"data": ...}`.
"""

import json
from pathlib import Path

from graphql import GraphQLError, GraphQLSchema, build_client_schema, build_schema

from codegraph_graphql.errors import SchemaLoadError
from codegraph_graphql.observability import get_logger

logger = get_logger(__name__)

SDL_EXTENSIONS = frozenset({".graphql", ".gql", ".graphqls"})
INTROSPECTION_EXTENSIONS = frozenset({".json"})


def load_schema(path: str | Path) -> GraphQLSchema:
    """
    Build a schema from an SDL or introspection JSON file.

    Args:
        path: Schema file

    Returns:
        GraphQLSchema

    Raises:
        SchemaLoadError: File missing, unsupported extension, or invalid content
    """
    path = Path(path)
    if not path.is_file():
        raise SchemaLoadError(f"Schema file not found: {path}", path=str(path))

    suffix = path.suffix.lower()
    if suffix not in SDL_EXTENSIONS and suffix not in INTROSPECTION_EXTENSIONS:
        raise SchemaLoadError(f"Unsupported schema file extension: {suffix or '(none)'}", path=str(path))

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaLoadError(f"Failed to read schema: {e}", path=str(path)) from e

    if suffix in SDL_EXTENSIONS:
        schema = load_schema_from_sdl(content, source=str(path))
    else:
        schema = load_schema_from_introspection(content, source=str(path))

    logger.info("schema_loaded", path=str(path), types=len(schema.type_map))
    return schema


def load_schema_from_sdl(sdl: str, source: str = "<sdl>") -> GraphQLSchema:
    try:
        return build_schema(sdl)
    except (GraphQLError, TypeError) as e:
        raise SchemaLoadError(f"Invalid SDL: {e}", path=source) from e


def load_schema_from_introspection(content: str, source: str = "<introspection>") -> GraphQLSchema:
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"Invalid JSON: {e.msg}", path=source, line=e.lineno) from e

    if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
        payload = payload["data"]
    if not isinstance(payload, dict) or "__schema" not in payload:
        raise SchemaLoadError("Introspection result has no __schema", path=source)

    try:
        return build_client_schema(payload)
    except (GraphQLError, TypeError, KeyError) as e:
        raise SchemaLoadError(f"Invalid introspection result: {e}", path=source) from e
