"""Adapter construction from settings."""

from codegraph_graphql.adapter.overlay import GraphQLLanguageServiceAdapter
from codegraph_graphql.config import OverlaySettings
from codegraph_graphql.observability import get_logger
from codegraph_graphql.parsing.source_helper import ScriptSourceHelper
from codegraph_graphql.schema_loader import load_schema

logger = get_logger(__name__)


def create_adapter(
    helper: ScriptSourceHelper,
    settings: OverlaySettings | None = None,
) -> GraphQLLanguageServiceAdapter:
    """
    Build an adapter with the configured schema and tag.

    Without a schema path the adapter starts inert; `update_schema` enables it.

    Raises:
        SchemaLoadError: If the configured schema cannot be loaded
    """
    if settings is None:
        settings = OverlaySettings()

    schema = load_schema(settings.schema_path) if settings.schema_path is not None else None
    adapter = GraphQLLanguageServiceAdapter(helper, schema=schema, tag=settings.tag_condition)
    logger.info(
        "adapter_created",
        schema_path=str(settings.schema_path) if settings.schema_path else None,
        tag=settings.tag,
    )
    return adapter
