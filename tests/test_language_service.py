"""
Unit tests for the graphql-core backed language service.
"""

import pytest

from codegraph_graphql.language_service import (
    CompletionItemKind,
    DiagnosticSeverity,
    get_autocomplete_suggestions,
    get_diagnostics,
    get_hover_information,
)
from codegraph_graphql.models import LineAndCharacter
from codegraph_graphql.template.position_codec import offset_to_line_and_char

pytestmark = pytest.mark.unit


def complete(schema, marked: str) -> list[str]:
    """Labels suggested at the `|` marker"""
    position = marked.index("|")
    text = marked.replace("|", "")
    items = get_autocomplete_suggestions(schema, text, offset_to_line_and_char(text, position + 1))
    return [item.label for item in items]


def hover(schema, text: str, word: str, occurrence: int = 0) -> str | None:
    position = -1
    for _ in range(occurrence + 1):
        position = text.index(word, position + 1)
    return get_hover_information(schema, text, offset_to_line_and_char(text, position + 1))


class TestCompletion:
    def test_root_fields(self, schema):
        labels = complete(schema, "query { | }")

        assert "hero" in labels
        assert "droid" in labels
        assert "__typename" in labels

    def test_anonymous_operation(self, schema):
        assert "hero" in complete(schema, "{ | }")

    def test_prefix_filter(self, schema):
        assert complete(schema, "query { he| }") == ["hero"]

    def test_nested_selection(self, schema):
        labels = complete(schema, "query {\n  hero {\n    |\n  }\n}")

        assert labels[:3] == ["name", "friends", "nickname"]
        assert "primaryFunction" not in labels

    def test_deprecated_field_flag(self, schema):
        items = get_autocomplete_suggestions(schema, "query { hero {  } }", LineAndCharacter(0, 16))

        nickname = next(item for item in items if item.label == "nickname")
        assert nickname.is_deprecated
        assert nickname.kind is CompletionItemKind.FIELD

    def test_arguments(self, schema):
        assert complete(schema, "query { hero(|) }") == ["episode"]

    def test_enum_argument_values(self, schema):
        assert complete(schema, "query { hero(episode: |) }") == ["NEWHOPE", "EMPIRE", "JEDI"]

    def test_type_condition(self, schema):
        labels = complete(schema, "query { hero { ... on | } }")

        assert set(labels) == {"Query", "Character", "Droid"}

    def test_document_level_keywords(self, schema):
        assert complete(schema, "|") == ["query", "mutation", "subscription", "fragment", "{"]

    def test_after_spread_is_empty(self, schema):
        assert complete(schema, "query { hero { ...| } }") == []

    def test_unlexable_text_is_empty(self, schema):
        assert complete(schema, 'query { hero(name: "unterminated |) }') == []


class TestHover:
    def test_field(self, schema):
        assert hover(schema, "query { hero { name } }", "hero") == "Query.hero: Character"

    def test_field_with_description(self, schema):
        text = hover(schema, "query { hero { name } }", "name")

        assert text == "Character.name: String\n\nThe name of the character"

    def test_argument(self, schema):
        assert hover(schema, "query { hero(episode: JEDI) { name } }", "episode") == "hero(episode: Episode)"

    def test_type_condition(self, schema):
        assert hover(schema, "query { hero { ... on Droid { name } } }", "Droid") == "Droid"

    def test_unknown_field(self, schema):
        assert hover(schema, "query { villain }", "villain") is None

    def test_punctuation(self, schema):
        assert hover(schema, "query { hero }", "{") is None


class TestDiagnostics:
    def test_valid_document(self, schema):
        assert get_diagnostics("query { hero { name } }", schema) == []

    def test_unknown_field(self, schema):
        text = "query { unknownField }"

        diagnostics = get_diagnostics(text, schema)

        assert len(diagnostics) == 1
        diagnostic = diagnostics[0]
        assert diagnostic.severity is DiagnosticSeverity.ERROR
        assert "unknownField" in diagnostic.message
        start = text.index("unknownField")
        assert diagnostic.range.start == LineAndCharacter(0, start)
        # One past the exclusive end
        assert diagnostic.range.end == LineAndCharacter(0, start + len("unknownField") + 1)

    def test_syntax_error_reported_alone(self, schema):
        diagnostics = get_diagnostics("query { hero { name }", schema)

        assert len(diagnostics) == 1
        assert diagnostics[0].source == "GraphQL: Syntax"
        assert diagnostics[0].severity is DiagnosticSeverity.ERROR

    def test_deprecated_field_is_warning(self, schema):
        diagnostics = get_diagnostics("query { hero { nickname } }", schema)

        assert [d.severity for d in diagnostics] == [DiagnosticSeverity.WARNING]

    def test_unused_fragment_is_not_reported(self, schema):
        assert get_diagnostics("fragment F on Character { name }", schema) == []
