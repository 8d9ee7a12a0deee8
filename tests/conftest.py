"""
Global test configuration and fixtures
"""

from collections.abc import Callable

import pytest
from graphql import GraphQLSchema, build_schema
from tree_sitter import Node as TSNode

from codegraph_graphql.parsing import TreeSitterSourceHelper

SCHEMA_SDL = """
type Query {
  hero(episode: Episode): Character
  droid(id: ID!): Droid
}

"The episodes of the original trilogy"
enum Episode {
  NEWHOPE
  EMPIRE
  JEDI
}

interface Character {
  "The name of the character"
  name: String
  friends: [Character]
  nickname: String @deprecated(reason: "Use name")
}

type Droid implements Character {
  name: String
  friends: [Character]
  nickname: String @deprecated(reason: "Use name")
  primaryFunction: String
}
"""

FILE_NAME = "main.ts"


@pytest.fixture
def schema_sdl() -> str:
    return SCHEMA_SDL


@pytest.fixture
def schema() -> GraphQLSchema:
    return build_schema(SCHEMA_SDL)


@pytest.fixture
def helper() -> TreeSitterSourceHelper:
    return TreeSitterSourceHelper()


@pytest.fixture
def source(helper) -> Callable[[str], str]:
    """Register TypeScript content under main.ts"""

    def register(content: str, file_name: str = FILE_NAME) -> str:
        helper.set_source(file_name, content)
        return content

    return register


@pytest.fixture
def template_with(helper) -> Callable[[str], TSNode]:
    """Template node of main.ts whose text contains a marker"""

    def find(marker: str, file_name: str = FILE_NAME) -> TSNode:
        text = helper.get_source_text(file_name)
        for node in helper.get_all_nodes(file_name, lambda n: n.type == "template_string"):
            start, end = helper.get_node_span(file_name, node)
            if marker in text[start:end]:
                return node
        raise AssertionError(f"No template containing {marker!r}")

    return find
