"""
Parser Registry for Tree-sitter

Grammars of the host languages that can embed GraphQL templates.
"""

from dataclasses import dataclass
from pathlib import Path

from tree_sitter import Language, Parser
from tree_sitter_language_pack import get_language

from codegraph_graphql.observability import get_logger

logger = get_logger(__name__)

DEFAULT_LANGUAGE = "typescript"


@dataclass(frozen=True, slots=True)
class HostLanguage:
    """
    Host grammar and the names that select it.

    Attributes:
        name: Grammar name in tree-sitter-language-pack
        aliases: Short names accepted wherever a language name is
        extensions: File suffixes parsed with this grammar
    """

    name: str
    aliases: tuple[str, ...] = ()
    extensions: tuple[str, ...] = ()


HOST_LANGUAGES = (
    HostLanguage("typescript", aliases=("ts",), extensions=(".ts", ".mts", ".cts")),
    HostLanguage("tsx", extensions=(".tsx",)),
    HostLanguage("javascript", aliases=("js", "jsx"), extensions=(".js", ".jsx", ".mjs", ".cjs")),
)


class ParserRegistry:
    """
    Registry for host-language parsers.

    Grammars load once at construction; a grammar that fails to load is
    logged and left out. Parsers are created on first use.
    """

    def __init__(self, languages: tuple[HostLanguage, ...] = HOST_LANGUAGES):
        self._grammars: dict[str, Language] = {}
        self._names: dict[str, str] = {}
        self._extensions: dict[str, str] = {}
        self._parsers: dict[str, Parser] = {}

        for language in languages:
            self._load(language)

    def _load(self, language: HostLanguage) -> None:
        try:
            self._grammars[language.name] = get_language(language.name)
        except Exception as e:
            logger.warning("grammar_load_failed", language=language.name, error=str(e))
            return

        for name in (language.name, *language.aliases):
            self._names[name] = language.name
        for extension in language.extensions:
            self._extensions[extension] = language.name
        logger.debug("grammar_loaded", language=language.name, aliases=list(language.aliases))

    def get_parser(self, language: str) -> Parser | None:
        """
        Parser for a language name or alias.

        Returns:
            Parser instance or None if language not supported
        """
        name = self._names.get(language.lower())
        if name is None:
            return None

        parser = self._parsers.get(name)
        if parser is None:
            parser = self._parsers[name] = Parser(self._grammars[name])
        return parser

    def detect_language(self, file_path: str | Path) -> str | None:
        """Grammar name for a file's extension, or None"""
        return self._extensions.get(Path(file_path).suffix.lower())

    def supports_language(self, language: str) -> bool:
        return language.lower() in self._names


_registry: ParserRegistry | None = None


def get_registry() -> ParserRegistry:
    """Process-wide registry"""
    global _registry
    if _registry is None:
        _registry = ParserRegistry()
    return _registry
