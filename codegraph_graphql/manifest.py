"""
Document extraction.

Collects every tagged, resolvable GraphQL document of a set of source files
into a manifest. Templates that cannot be resolved, or whose combined text
does not parse, are reported as extract errors instead.

Manifest JSON:

    {
      "documents": [
        {
          "file_name": "src/queries.ts",
          "type": "query",
          "operation_name": "Hero",
          "fragment_name": null,
          "body": "query Hero { hero { name } }",
          "tag": "gql",
          "document_start": {"line": 3, "character": 22},
          "document_end": {"line": 3, "character": 50}
        }
      ]
    }
"""

from typing import Literal

from graphql import FragmentDefinitionNode, OperationDefinitionNode, parse
from graphql.error import GraphQLSyntaxError
from pydantic import BaseModel, Field

from codegraph_graphql.errors import GraphQLOverlayError
from codegraph_graphql.observability import get_logger
from codegraph_graphql.parsing.source_helper import ScriptSourceHelper
from codegraph_graphql.template.nodes import is_template_node
from codegraph_graphql.template.resolver import TemplateResolver
from codegraph_graphql.template.tag_matcher import TagCondition, get_tag_name, is_tagged

logger = get_logger(__name__)

DocumentType = Literal["query", "mutation", "subscription", "fragment", "complex"]


class DocumentLocation(BaseModel):
    """Zero-based line/character in the outer source"""

    line: int
    character: int


class ManifestDocumentEntry(BaseModel):
    """One extracted GraphQL document"""

    file_name: str
    type: DocumentType
    operation_name: str | None = None
    fragment_name: str | None = None
    body: str
    tag: str | None = None
    document_start: DocumentLocation
    document_end: DocumentLocation


class Manifest(BaseModel):
    documents: list[ManifestDocumentEntry] = Field(default_factory=list)


class ExtractError(BaseModel):
    """Template that could not be extracted"""

    file_name: str
    message: str
    start: DocumentLocation
    end: DocumentLocation


def extract_documents(
    helper: ScriptSourceHelper,
    file_names: list[str],
    tag: TagCondition | None = None,
) -> tuple[list[ExtractError], Manifest]:
    """
    Extract GraphQL documents from source files.

    Args:
        helper: Host tree access
        file_names: Files to scan, in order
        tag: Tag condition (None: every template)

    Returns:
        (errors, manifest), both in file then source order
    """
    resolver = TemplateResolver(helper)
    errors: list[ExtractError] = []
    manifest = Manifest()

    for file_name in file_names:
        try:
            nodes = helper.get_all_nodes(file_name, is_template_node)
        except GraphQLOverlayError as e:
            logger.warning("extract_file_skipped", file_name=file_name, reason=e.message)
            errors.append(
                ExtractError(
                    file_name=file_name,
                    message=e.message,
                    start=DocumentLocation(line=0, character=0),
                    end=DocumentLocation(line=0, character=0),
                )
            )
            continue

        for node in nodes:
            if tag is not None and not is_tagged(node, tag):
                continue

            node_start, node_end = helper.get_node_span(file_name, node)
            start = _location(helper, file_name, node_start + 1)
            end = _location(helper, file_name, max(node_end - 1, node_start + 1))

            info = resolver.resolve(file_name, node)
            if info is None:
                errors.append(
                    ExtractError(
                        file_name=file_name,
                        message="This operation or fragment has too complex dynamic expression(s) to analyze.",
                        start=start,
                        end=end,
                    )
                )
                continue

            try:
                entry = _to_entry(file_name, info.combined_text, get_tag_name(node), start, end)
            except GraphQLSyntaxError as e:
                errors.append(ExtractError(file_name=file_name, message=e.message, start=start, end=end))
                continue
            manifest.documents.append(entry)

    logger.info("documents_extracted", files=len(file_names), documents=len(manifest.documents), errors=len(errors))
    return errors, manifest


def _to_entry(
    file_name: str,
    body: str,
    tag: str | None,
    start: DocumentLocation,
    end: DocumentLocation,
) -> ManifestDocumentEntry:
    document = parse(body)
    operations = [d for d in document.definitions if isinstance(d, OperationDefinitionNode)]
    fragments = [d for d in document.definitions if isinstance(d, FragmentDefinitionNode)]

    # One operation plus the fragments it spreads, or a lone fragment
    doc_type: DocumentType = "complex"
    operation_name = None
    fragment_name = None
    if len(operations) == 1:
        doc_type = operations[0].operation.value
        operation_name = operations[0].name.value if operations[0].name else None
    elif not operations and len(fragments) == 1:
        doc_type = "fragment"
        fragment_name = fragments[0].name.value

    return ManifestDocumentEntry(
        file_name=file_name,
        type=doc_type,
        operation_name=operation_name,
        fragment_name=fragment_name,
        body=body,
        tag=tag,
        document_start=start,
        document_end=end,
    )


def _location(helper: ScriptSourceHelper, file_name: str, position: int) -> DocumentLocation:
    location = helper.get_line_and_char(file_name, position)
    return DocumentLocation(line=location.line, character=location.character)
