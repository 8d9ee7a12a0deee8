"""
Unit tests for template resolution and the segment table.
"""

import pytest

from codegraph_graphql.errors import PositionOutOfRangeError
from codegraph_graphql.models import LineAndCharacter
from codegraph_graphql.template.resolver import SegmentOrigin, TemplateResolver

FRAGMENT_SOURCE = """const Fragment = gql`fragment F on Character { name }`;
const Query = gql`query { hero { ...F } } ${Fragment}`;
"""

pytestmark = pytest.mark.unit


class TestTemplateResolver:
    """Test combined text construction."""

    @pytest.fixture
    def resolver(self, helper):
        return TemplateResolver(helper)

    def test_literal_template(self, source, template_with, resolver):
        source("const q = gql`query { hero { name } }`;")

        info = resolver.resolve("main.ts", template_with("hero"))

        assert info.combined_text == "query { hero { name } }"
        assert len(info.segments) == 1
        assert info.segments[0].origin is SegmentOrigin.LITERAL

    def test_fragment_substitution(self, source, template_with, resolver):
        text = source(FRAGMENT_SOURCE)

        info = resolver.resolve("main.ts", template_with("query"))

        assert info.combined_text == "query { hero { ...F } } fragment F on Character { name }"
        origins = [segment.origin for segment in info.segments]
        assert origins == [SegmentOrigin.LITERAL, SegmentOrigin.SUBSTITUTION, SegmentOrigin.LITERAL]
        assert info.node_start == text.index("`query")
        assert info.node_end == text.index("`;\n", info.node_start + 1) + 1

    def test_string_literal_substitution(self, source, template_with, resolver):
        source("const fields = 'name';\nconst q = gql`query { hero { ${fields} } }`;")

        info = resolver.resolve("main.ts", template_with("query"))

        assert info.combined_text == "query { hero { name } }"

    def test_nested_references(self, source, template_with, resolver):
        source(
            "const A = gql`fragment A on Character { name }`;\n"
            "const B = gql`fragment B on Character { ...A } ${A}`;\n"
            "const q = gql`query { hero { ...B } } ${B}`;\n"
        )

        info = resolver.resolve("main.ts", template_with("query"))

        assert info.combined_text == (
            "query { hero { ...B } } fragment B on Character { ...A } fragment A on Character { name }"
        )

    def test_complex_expression_is_unresolvable(self, source, template_with, resolver):
        source("const q = gql`query { hero { ${getFields()} } }`;")

        assert resolver.resolve("main.ts", template_with("query")) is None

    def test_unknown_identifier_is_unresolvable(self, source, template_with, resolver):
        source("const q = gql`query { hero { ...F } } ${Missing}`;")

        assert resolver.resolve("main.ts", template_with("query")) is None

    def test_non_template_value_is_unresolvable(self, source, template_with, resolver):
        source("const n = 42;\nconst q = gql`query { hero { ...F } } ${n}`;")

        assert resolver.resolve("main.ts", template_with("query")) is None

    def test_self_reference_is_unresolvable(self, source, template_with, resolver):
        source("const q = gql`query { hero { ...F } } ${q}`;")

        assert resolver.resolve("main.ts", template_with("query")) is None

    def test_mutual_reference_is_unresolvable(self, source, template_with, resolver):
        source(
            "const A = gql`fragment A on Character { ...B } ${B}`;\n"
            "const B = gql`fragment B on Character { ...A } ${A}`;\n"
        )

        assert resolver.resolve("main.ts", template_with("fragment A")) is None


class TestSegmentTable:
    """Test position mapping between outer source and combined text."""

    @pytest.fixture
    def resolved(self, source, template_with, helper):
        text = source(FRAGMENT_SOURCE)
        info = TemplateResolver(helper).resolve("main.ts", template_with("query"))
        return text, info

    def test_pure_literal_round_trip(self, source, template_with, helper):
        text = source("const q = gql`\n  query {\n    hero { name }\n  }\n`;")
        info = TemplateResolver(helper).resolve("main.ts", template_with("hero"))

        for outer in range(info.node_start + 1, info.node_end - 1):
            mapped = info.get_source_position(info.get_inner_position(outer))
            assert mapped.pos == outer
            assert not mapped.is_in_other_expression
        assert text[info.node_start + 1 : info.node_end - 1] == info.combined_text

    def test_literal_positions_round_trip(self, resolved):
        text, info = resolved

        outer = text.index("hero", info.node_start)
        inner = info.get_inner_position(outer)

        assert info.combined_text[inner : inner + 4] == "hero"
        source_position = info.get_source_position(inner)
        assert source_position.pos == outer
        assert not source_position.is_in_other_expression

    def test_drift_after_substitution(self, source, template_with, helper):
        text = source(
            "const Fragment = gql`fragment F on Character { name }`;\n"
            "const Query = gql`${Fragment} query`;\n"
        )
        info = TemplateResolver(helper).resolve("main.ts", template_with("query"))

        outer = text.index("query", text.index("Query"))
        inner = info.get_inner_position(outer)

        # `${Fragment}` is 11 characters wide, its text 32
        assert inner - (outer - (info.node_start + 1)) == 21
        assert info.combined_text[inner:].startswith("query")

    def test_substituted_text_maps_to_substitution_start(self, resolved):
        text, info = resolved

        inner = info.combined_text.index("fragment F")
        source_position = info.get_source_position(inner + 5)

        assert source_position.is_in_other_expression
        assert source_position.pos == text.index("${Fragment}")

    def test_inside_substitution_maps_to_substituted_text_start(self, resolved):
        text, info = resolved

        inner = info.get_inner_position(text.index("Fragment}"))

        assert info.combined_text[inner:].startswith("fragment F")

    def test_clamping(self, resolved):
        _, info = resolved

        assert info.get_inner_position(0) == 0
        assert info.get_inner_position(10_000) == len(info.combined_text)

    def test_end_of_text_maps_to_end_of_last_segment(self, resolved):
        text, info = resolved

        end = info.get_source_position(len(info.combined_text))

        assert not end.is_in_other_expression
        assert end.pos == text.index("${Fragment}") + len("${Fragment}")

    def test_end_boundary_belongs_to_segment_before(self, resolved):
        text, info = resolved

        boundary = info.segments[1].inner_start

        assert info.get_source_position(boundary).is_in_other_expression
        end = info.get_source_position(boundary, at_end=True)
        assert not end.is_in_other_expression
        assert end.pos == text.index("${Fragment}")

    def test_end_boundary_inside_substitution_maps_to_its_end(self, resolved):
        text, info = resolved

        end = info.get_source_position(info.segments[1].inner_end, at_end=True)

        assert end.is_in_other_expression
        assert end.pos == text.index("${Fragment}") + len("${Fragment}")

    def test_out_of_range_raises(self, resolved):
        _, info = resolved

        with pytest.raises(PositionOutOfRangeError):
            info.get_source_position(-1)
        with pytest.raises(PositionOutOfRangeError):
            info.get_source_position(len(info.combined_text) + 1)

    def test_location_conversion(self, source, template_with, helper):
        source("const q = gql`\n  query {\n    hero\n  }\n`;")
        info = TemplateResolver(helper).resolve("main.ts", template_with("hero"))

        inner = info.combined_text.index("hero")
        location = info.convert_inner_position_to_location(inner)

        assert location == LineAndCharacter(2, 4)
        assert info.convert_inner_location_to_position(location) == inner
