"""
Diagnostics over a GraphQL text.

Syntax errors come from the parser, errors from the standard validation
rules, warnings from deprecated-usage checks. Every fragment in a text is
considered used, since it may be spread from another document.
"""

from graphql import GraphQLError, GraphQLSchema, parse, specified_rules, validate
from graphql.error import GraphQLSyntaxError
from graphql.validation import (
    ExecutableDefinitionsRule,
    NoDeprecatedCustomRule,
    NoUnusedFragmentsRule,
)

from codegraph_graphql.language_service.types import Diagnostic, DiagnosticSeverity, Range
from codegraph_graphql.template.position_codec import offset_to_line_and_char

SKIPPED_RULES = (NoUnusedFragmentsRule, ExecutableDefinitionsRule)
VALIDATION_RULES = [rule for rule in specified_rules if rule not in SKIPPED_RULES]


def get_diagnostics(text: str, schema: GraphQLSchema) -> list[Diagnostic]:
    """
    Diagnose a GraphQL document.

    Returns:
        Diagnostics in rule order; a syntax error is reported alone
    """
    try:
        document = parse(text)
    except GraphQLSyntaxError as e:
        return _to_diagnostics(text, e, DiagnosticSeverity.ERROR, source="GraphQL: Syntax")

    diagnostics: list[Diagnostic] = []
    for error in validate(schema, document, VALIDATION_RULES):
        diagnostics.extend(_to_diagnostics(text, error, DiagnosticSeverity.ERROR))
    for error in validate(schema, document, [NoDeprecatedCustomRule]):
        diagnostics.extend(_to_diagnostics(text, error, DiagnosticSeverity.WARNING, source="GraphQL: Deprecation"))
    return diagnostics


def _to_diagnostics(
    text: str,
    error: GraphQLError,
    severity: DiagnosticSeverity,
    source: str = "GraphQL: Validation",
) -> list[Diagnostic]:
    spans = [(node.loc.start, node.loc.end) for node in error.nodes or [] if node.loc is not None]
    if not spans:
        spans = [(position, position + 1) for position in error.positions or [0]]

    return [
        Diagnostic(
            range=_range(text, start, end),
            severity=severity,
            message=error.message,
            source=source,
        )
        for start, end in spans
    ]


def _range(text: str, start: int, end: int) -> Range:
    # One past the exclusive end, the convention shared with the completion cursor
    return Range(start=offset_to_line_and_char(text, start), end=offset_to_line_and_char(text, end + 1))
