"""
Unit tests for tag matching and template part detection.
"""

import pytest

from codegraph_graphql.template.nodes import TemplatePartKind, locate_template_part
from codegraph_graphql.template.tag_matcher import get_tag_name, is_tagged

pytestmark = pytest.mark.unit


class TestTagMatcher:
    """Test tag names of template nodes."""

    def test_identifier_tag(self, source, template_with):
        source("const q = gql`{ hero { name } }`;")

        node = template_with("hero")

        assert get_tag_name(node) == "gql"
        assert is_tagged(node, "gql")
        assert not is_tagged(node, "sql")

    def test_member_expression_tag(self, source, template_with):
        source("const q = graphql.gql`{ hero { name } }`;")

        assert get_tag_name(template_with("hero")) == "graphql.gql"

    def test_tag_set(self, source, template_with):
        source("const a = gql`{ hero { name } }`;\nconst b = graphql`{ droid(id: 1) { name } }`;")

        tags = frozenset({"gql", "graphql"})
        assert is_tagged(template_with("hero"), tags)
        assert is_tagged(template_with("droid"), tags)
        assert not is_tagged(template_with("hero"), {"sql"})

    def test_untagged_template(self, source, template_with):
        source("const q = `{ hero { name } }`;")

        node = template_with("hero")

        assert get_tag_name(node) is None
        assert not is_tagged(node, "gql")

    def test_call_argument_is_not_tagged(self, source, template_with):
        source("const q = gql(`{ hero { name } }`);")

        assert not is_tagged(template_with("hero"), "gql")


class TestLocateTemplatePart:
    """Test classification of positions into template parts."""

    @pytest.fixture
    def locate(self, helper):
        def run(position: int):
            found = helper.get_node("main.ts", position)
            if found is None:
                return None
            return locate_template_part(found, position, lambda n: helper.get_node_span("main.ts", n))

        return run

    def test_literal(self, source, locate):
        text = source("const q = gql`{ hero }`;")

        part = locate(text.index("hero"))

        assert part.kind is TemplatePartKind.LITERAL
        assert part.root.type == "template_string"

    def test_head_middle_tail(self, source, locate):
        text = source("const q = gql`query { ${A} hero ${B} }`;")

        assert locate(text.index("query")).kind is TemplatePartKind.HEAD
        assert locate(text.index("hero")).kind is TemplatePartKind.MIDDLE
        assert locate(text.rindex("}`") - 1).kind is TemplatePartKind.TAIL

    def test_substitution_expression_is_not_template_text(self, source, locate):
        text = source("const q = gql`query { ${A} }`;")

        assert locate(text.index("A}")) is None

    def test_outside_template(self, source, locate):
        text = source("const q = gql`{ hero }`;")

        assert locate(text.index("const")) is None
