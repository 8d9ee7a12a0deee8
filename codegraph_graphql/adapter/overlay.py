"""
GraphQL overlay on top of the host's query functions.

Each public operation takes the host's own handler as `delegate`. The overlay
answers only for positions inside a tagged, resolvable template and only
while a schema is configured; otherwise the delegate's result is returned
as is. Diagnostics are additive: host diagnostics first, then GraphQL ones.

Decision table for completion and hover:

    schema missing         -> delegate
    no template at cursor  -> delegate  (includes untagged templates)
    template unresolvable  -> delegate
    otherwise              -> GraphQL result (delegate if it is empty)
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from graphql import GraphQLSchema
from tree_sitter import Node as TSNode

from codegraph_graphql.adapter.diagnostic_translator import DiagnosticTranslator, too_complex_diagnostic
from codegraph_graphql.language_service import (
    CompletionItem,
    get_autocomplete_suggestions,
    get_diagnostics,
    get_hover_information,
)
from codegraph_graphql.models import (
    CompletionEntry,
    CompletionInfo,
    DisplayPart,
    HostDiagnostic,
    QuickInfo,
    TextSpan,
)
from codegraph_graphql.observability import get_logger
from codegraph_graphql.parsing.source_helper import ScriptSourceHelper
from codegraph_graphql.template.nodes import is_template_node, locate_template_part
from codegraph_graphql.template.resolver import ResolvedTemplateInfo, TemplateResolver
from codegraph_graphql.template.tag_matcher import TagCondition, is_tagged

logger = get_logger(__name__)

GetCompletionsAtPosition = Callable[[str, int, Any], CompletionInfo | None]
GetSemanticDiagnostics = Callable[[str], list[HostDiagnostic] | None]
GetQuickInfoAtPosition = Callable[[str, int], QuickInfo | None]

# Suggestions are returned in ranking order; hosts must not re-sort them
COMPLETION_SORT_TEXT = "0"
COMPLETION_KIND_MODIFIERS = "declare"
UNKNOWN_COMPLETION_KIND = "unknown"
HOVER_SPAN_LENGTH = 1


class OverlayDecisionKind(str, Enum):
    DEFER_NO_SCHEMA = "defer_no_schema"
    DEFER_NO_NODE = "defer_no_node"
    DEFER_UNRESOLVED = "defer_unresolved"
    ANALYZE = "analyze"


@dataclass(frozen=True, slots=True)
class OverlayDecision:
    """
    Outcome of gating a position-based query.

    schema and info are set only for ANALYZE.
    """

    kind: OverlayDecisionKind
    schema: GraphQLSchema | None = None
    node: TSNode | None = None
    info: ResolvedTemplateInfo | None = None

    @property
    def should_defer(self) -> bool:
        return self.kind is not OverlayDecisionKind.ANALYZE


def translate_completion_items(items: list[CompletionItem]) -> CompletionInfo:
    """Completion items to host entries, keeping their order"""
    return CompletionInfo(
        entries=[
            CompletionEntry(
                name=item.label,
                kind=str(int(item.kind)) if item.kind is not None else UNKNOWN_COMPLETION_KIND,
                kind_modifiers=COMPLETION_KIND_MODIFIERS,
                sort_text=COMPLETION_SORT_TEXT,
            )
            for item in items
        ],
    )


class GraphQLLanguageServiceAdapter:
    """
    Overlays GraphQL completion, diagnostics and hover onto a host.

    Thread-Safety: one query at a time; `update_schema` swaps the schema
    reference in a single assignment and each query reads it once.
    """

    def __init__(
        self,
        helper: ScriptSourceHelper,
        schema: GraphQLSchema | None = None,
        tag: TagCondition | None = None,
    ):
        """
        Args:
            helper: Host tree access
            schema: GraphQL schema (None: overlay inert until update_schema)
            tag: Tag condition (None: every template is a GraphQL document)
        """
        self._helper = helper
        self._resolver = TemplateResolver(helper)
        self._schema = schema
        self._tag_condition = tag

    @property
    def schema(self) -> GraphQLSchema | None:
        return self._schema

    @property
    def tag_condition(self) -> TagCondition | None:
        return self._tag_condition

    def update_schema(self, schema: GraphQLSchema | None) -> None:
        self._schema = schema

    # ============================================================
    # Host Operations
    # ============================================================

    def get_completions_at_position(
        self,
        delegate: GetCompletionsAtPosition,
        file_name: str,
        position: int,
        options: Any = None,
    ) -> CompletionInfo | None:
        decision = self.decide(file_name, position)
        if decision.should_defer:
            return delegate(file_name, position, options)

        info = decision.info
        # Suggestions come back empty for a cursor exactly on a token boundary
        inner_position = info.get_inner_position(position) + 1
        location = info.convert_inner_position_to_location(inner_position)
        logger.debug("completion_search", text=info.combined_text, position=inner_position)

        try:
            items = get_autocomplete_suggestions(decision.schema, info.combined_text, location)
        except Exception as e:
            logger.warning("completion_failed", file_name=file_name, error=str(e), exc_info=True)
            return delegate(file_name, position, options)

        logger.debug("completion_result", count=len(items))
        return translate_completion_items(items)

    def get_semantic_diagnostics(
        self,
        delegate: GetSemanticDiagnostics,
        file_name: str,
    ) -> list[HostDiagnostic] | None:
        errors = delegate(file_name)
        schema = self._schema
        if schema is None:
            return errors

        result = list(errors or [])
        try:
            nodes = self._find_all_template_nodes(file_name)
        except Exception as e:
            logger.warning("template_discovery_failed", file_name=file_name, error=str(e), exc_info=True)
            return result

        for node in nodes:
            result.extend(self._diagnose_node(schema, file_name, node))
        return result

    def get_quick_info_at_position(
        self,
        delegate: GetQuickInfoAtPosition,
        file_name: str,
        position: int,
    ) -> QuickInfo | None:
        decision = self.decide(file_name, position)
        if decision.should_defer:
            return delegate(file_name, position)

        info = decision.info
        cursor = info.convert_inner_position_to_location(info.get_inner_position(position) + 1)
        try:
            text = get_hover_information(decision.schema, info.combined_text, cursor)
        except Exception as e:
            logger.warning("hover_failed", file_name=file_name, error=str(e), exc_info=True)
            return delegate(file_name, position)

        if not isinstance(text, str) or not text:
            return delegate(file_name, position)

        return QuickInfo(
            text_span=TextSpan(start=position, length=HOVER_SPAN_LENGTH),
            display_parts=[DisplayPart(text=text)],
        )

    # ============================================================
    # Gating
    # ============================================================

    def decide(self, file_name: str, position: int) -> OverlayDecision:
        """Gate a position-based query (see the module decision table)"""
        schema = self._schema
        if schema is None:
            return OverlayDecision(OverlayDecisionKind.DEFER_NO_SCHEMA)

        try:
            node = self._find_template_node(file_name, position)
            if node is None:
                return OverlayDecision(OverlayDecisionKind.DEFER_NO_NODE)
            info = self._resolver.resolve(file_name, node)
        except Exception as e:
            logger.warning("template_lookup_failed", file_name=file_name, error=str(e), exc_info=True)
            return OverlayDecision(OverlayDecisionKind.DEFER_NO_NODE)

        if info is None:
            return OverlayDecision(OverlayDecisionKind.DEFER_UNRESOLVED, node=node)
        return OverlayDecision(OverlayDecisionKind.ANALYZE, schema=schema, node=node, info=info)

    def _find_template_node(self, file_name: str, position: int) -> TSNode | None:
        found = self._helper.get_node(file_name, position)
        if found is None:
            return None

        part = locate_template_part(found, position, lambda n: self._helper.get_node_span(file_name, n))
        if part is None:
            return None

        if self._tag_condition is not None and not is_tagged(part.root, self._tag_condition):
            return None
        return part.root

    def _find_all_template_nodes(self, file_name: str) -> list[TSNode]:
        nodes = self._helper.get_all_nodes(file_name, is_template_node)
        if self._tag_condition is None:
            return nodes
        return [node for node in nodes if is_tagged(node, self._tag_condition)]

    def _diagnose_node(self, schema: GraphQLSchema, file_name: str, node: TSNode) -> list[HostDiagnostic]:
        try:
            info = self._resolver.resolve(file_name, node)
            if info is None:
                node_start, node_end = self._helper.get_node_span(file_name, node)
                return [too_complex_diagnostic(file_name, node_start, node_end)]

            diagnostics = get_diagnostics(info.combined_text, schema)
            return DiagnosticTranslator(file_name, info).translate_all(diagnostics)
        except Exception as e:
            logger.warning("diagnostics_failed", file_name=file_name, error=str(e), exc_info=True)
            return []
