"""
Unit tests for diagnostic translation to outer positions.
"""

import pytest

from codegraph_graphql.adapter.diagnostic_translator import (
    GENERIC_DIAGNOSTIC_CODE,
    OTHER_EXPRESSION_MESSAGE,
    TOO_COMPLEX_MESSAGE,
    DiagnosticTranslator,
    too_complex_diagnostic,
    translate_diagnostic,
)
from codegraph_graphql.language_service import Diagnostic, DiagnosticSeverity, Range, get_diagnostics
from codegraph_graphql.models import DiagnosticCategory, LineAndCharacter
from codegraph_graphql.template.resolver import ResolvedTemplateInfo, Segment, SegmentOrigin, TemplateResolver

pytestmark = pytest.mark.unit


def diagnostic(start: int, end: int, severity=DiagnosticSeverity.ERROR, message="Boom") -> Diagnostic:
    return Diagnostic(
        range=Range(start=LineAndCharacter(0, start), end=LineAndCharacter(0, end)),
        severity=severity,
        message=message,
    )


class TestTranslateDiagnostic:
    @pytest.mark.parametrize(
        "severity, category",
        [
            (DiagnosticSeverity.ERROR, DiagnosticCategory.ERROR),
            (DiagnosticSeverity.WARNING, DiagnosticCategory.WARNING),
            (DiagnosticSeverity.INFORMATION, DiagnosticCategory.MESSAGE),
            (DiagnosticSeverity.HINT, DiagnosticCategory.SUGGESTION),
        ],
    )
    def test_severity_mapping(self, severity, category):
        result = translate_diagnostic(diagnostic(0, 1, severity=severity), "main.ts", 10, 3)

        assert result.category is category

    def test_first_line_of_message_and_generic_code(self):
        result = translate_diagnostic(diagnostic(0, 1, message="First line\nSecond line"), "main.ts", 10, 3)

        assert result.message_text == "First line"
        assert result.code == GENERIC_DIAGNOSTIC_CODE
        assert (result.file_name, result.start, result.length) == ("main.ts", 10, 3)

    def test_too_complex_warning(self):
        result = too_complex_diagnostic("main.ts", 5, 25)

        assert result.category is DiagnosticCategory.WARNING
        assert result.message_text == TOO_COMPLEX_MESSAGE
        assert (result.start, result.length) == (5, 20)


class TestDiagnosticTranslator:
    """Translate against a synthetic segment table.

    Outer: 10 literal chars at 101..111, a 6 char `${X}` at 111..117 standing
    for 20 inner chars, then 5 literal chars at 117..122.
    """

    @pytest.fixture
    def info(self):
        return ResolvedTemplateInfo(
            combined_text="a" * 10 + "b" * 20 + "c" * 5,
            segments=(
                Segment(101, 111, 0, 10, SegmentOrigin.LITERAL),
                Segment(111, 117, 10, 30, SegmentOrigin.SUBSTITUTION),
                Segment(117, 122, 30, 35, SegmentOrigin.LITERAL),
            ),
            node_start=100,
            node_end=123,
        )

    def test_pinpoint(self, info):
        result = DiagnosticTranslator("main.ts", info).translate(diagnostic(2, 6))

        assert (result.start, result.length) == (103, 3)
        assert result.message_text == "Boom"

    def test_after_substitution_uses_drift(self, info):
        result = DiagnosticTranslator("main.ts", info).translate(diagnostic(31, 34))

        assert (result.start, result.length) == (118, 2)

    def test_start_in_substitution_is_node_scoped(self, info):
        result = DiagnosticTranslator("main.ts", info).translate(diagnostic(15, 18))

        assert result.message_text == OTHER_EXPRESSION_MESSAGE
        assert result.category is DiagnosticCategory.ERROR
        assert result.code == GENERIC_DIAGNOSTIC_CODE
        assert (result.start, result.length) == (100, 23)

    def test_end_before_substitution_keeps_full_length(self, info):
        result = DiagnosticTranslator("main.ts", info).translate(diagnostic(5, 11))

        assert (result.start, result.length) == (106, 5)

    def test_end_at_end_of_text_keeps_full_length(self, info):
        result = DiagnosticTranslator("main.ts", info).translate(diagnostic(32, 36))

        assert (result.start, result.length) == (119, 3)

    def test_unmappable_end_gives_zero_length(self, info):
        result = DiagnosticTranslator("main.ts", info).translate(diagnostic(32, 40))

        assert (result.start, result.length) == (119, 0)

    def test_empty_span_never_negative(self, info):
        result = DiagnosticTranslator("main.ts", info).translate(diagnostic(4, 4))

        assert result.length == 0

    def test_unmappable_start_is_node_scoped(self, info):
        result = DiagnosticTranslator("main.ts", info).translate(diagnostic(50, 51))

        assert result.message_text == OTHER_EXPRESSION_MESSAGE


class TestTranslateResolvedTemplate:
    def test_exact_span_of_offending_field(self, source, template_with, helper, schema):
        text = source("const q = gql`query { unknownField }`;")
        info = TemplateResolver(helper).resolve("main.ts", template_with("unknownField"))

        results = DiagnosticTranslator("main.ts", info).translate_all(get_diagnostics(info.combined_text, schema))

        assert len(results) == 1
        assert results[0].start == text.index("unknownField")
        assert results[0].length == len("unknownField")
