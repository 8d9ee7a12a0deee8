"""
Combined-text diagnostics to outer-source diagnostics.

A diagnostic whose start lies in literal text is reported at its exact
outer position. One whose start lies in substituted text has no exact outer
counterpart and is reported over the whole template node instead.
"""

from codegraph_graphql.errors import PositionOutOfRangeError
from codegraph_graphql.language_service.types import Diagnostic, DiagnosticSeverity
from codegraph_graphql.models import DiagnosticCategory, HostDiagnostic
from codegraph_graphql.template.resolver import ResolvedTemplateInfo

GENERIC_DIAGNOSTIC_CODE = 9999
TOO_COMPLEX_MESSAGE = "This operation or fragment has too complex dynamic expression(s) to analyze."
OTHER_EXPRESSION_MESSAGE = "This expression has GraphQL errors."

SEVERITY_CATEGORIES = {
    DiagnosticSeverity.ERROR: DiagnosticCategory.ERROR,
    DiagnosticSeverity.WARNING: DiagnosticCategory.WARNING,
    DiagnosticSeverity.INFORMATION: DiagnosticCategory.MESSAGE,
    DiagnosticSeverity.HINT: DiagnosticCategory.SUGGESTION,
}


def translate_diagnostic(diagnostic: Diagnostic, file_name: str, start: int, length: int) -> HostDiagnostic:
    """Host diagnostic with the first line of the message"""
    return HostDiagnostic(
        code=diagnostic.code if isinstance(diagnostic.code, int) else GENERIC_DIAGNOSTIC_CODE,
        category=SEVERITY_CATEGORIES.get(diagnostic.severity, DiagnosticCategory.ERROR),
        message_text=diagnostic.message.split("\n")[0],
        file_name=file_name,
        start=start,
        length=length,
    )


def too_complex_diagnostic(file_name: str, node_start: int, node_end: int) -> HostDiagnostic:
    """Warning over a template that cannot be resolved"""
    return HostDiagnostic(
        code=GENERIC_DIAGNOSTIC_CODE,
        category=DiagnosticCategory.WARNING,
        message_text=TOO_COMPLEX_MESSAGE,
        file_name=file_name,
        start=node_start,
        length=node_end - node_start,
    )


class DiagnosticTranslator:
    """
    Translates diagnostics of one resolved template.

    Never raises: unmappable end positions give a zero-length span,
    unmappable start positions fall back to the node-scoped diagnostic.
    """

    def __init__(self, file_name: str, info: ResolvedTemplateInfo):
        self._file_name = file_name
        self._info = info

    def translate_all(self, diagnostics: list[Diagnostic]) -> list[HostDiagnostic]:
        return [self.translate(diagnostic) for diagnostic in diagnostics]

    def translate(self, diagnostic: Diagnostic) -> HostDiagnostic:
        info = self._info
        try:
            start = info.get_source_position(info.convert_inner_location_to_position(diagnostic.range.start))
        except PositionOutOfRangeError:
            return self._node_scoped()

        # range.end is one past the exclusive end. The exclusive end is mapped
        # as a boundary so text ending right before `${` or at the end of the
        # template keeps its full length.
        try:
            end_offset = info.convert_inner_location_to_position(diagnostic.range.end) - 1
            end = info.get_source_position(end_offset, at_end=True)
            length = max((end.pos + 1) - start.pos - 1, 0)
        except PositionOutOfRangeError:
            length = 0

        if start.is_in_other_expression:
            return self._node_scoped()
        return translate_diagnostic(diagnostic, self._file_name, start.pos, length)

    def _node_scoped(self) -> HostDiagnostic:
        return HostDiagnostic(
            code=GENERIC_DIAGNOSTIC_CODE,
            category=DiagnosticCategory.ERROR,
            message_text=OTHER_EXPRESSION_MESSAGE,
            file_name=self._file_name,
            start=self._info.node_start,
            length=self._info.node_end - self._info.node_start,
        )
