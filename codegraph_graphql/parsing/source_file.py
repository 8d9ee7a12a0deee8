"""
Source File representation
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class SourceFile:
    """
    Represents a host source file.

    tree-sitter reports byte offsets into the encoded content; the rest of the
    package works with character offsets into `content`. The two coincide for
    ASCII sources.

    Attributes:
        file_path: Path or name used by the host
        content: File content as string
        language: Grammar name (typescript, tsx, javascript)
        encoding: File encoding (default: utf-8)
    """

    file_path: str
    content: str
    language: str
    encoding: str = "utf-8"
    _encoded: bytes = field(init=False, repr=False)
    _is_ascii: bool = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._encoded = self.content.encode(self.encoding)
        self._is_ascii = len(self._encoded) == len(self.content)

    @classmethod
    def from_file(
        cls,
        file_path: str | Path,
        language: str | None = None,
        encoding: str = "utf-8",
    ) -> "SourceFile":
        """
        Load source file from disk.

        Args:
            file_path: Path to file
            language: Language override (auto-detected if None)
            encoding: File encoding

        Returns:
            SourceFile instance

        Raises:
            ValueError: If the language cannot be detected
        """
        path = Path(file_path)
        content = path.read_text(encoding=encoding)

        if language is None:
            from .parser_registry import get_registry

            language = get_registry().detect_language(path)
            if language is None:
                raise ValueError(f"Could not detect language for: {path}")

        return cls(file_path=str(file_path), content=content, language=language, encoding=encoding)

    @property
    def encoded(self) -> bytes:
        """Encoded content handed to tree-sitter"""
        return self._encoded

    def byte_to_char(self, byte_offset: int) -> int:
        """Convert a tree-sitter byte offset to a character offset"""
        if self._is_ascii:
            return byte_offset
        return len(self._encoded[:byte_offset].decode(self.encoding, errors="ignore"))

    def char_to_byte(self, char_offset: int) -> int:
        """Convert a character offset to a tree-sitter byte offset"""
        if self._is_ascii:
            return char_offset
        return len(self.content[:char_offset].encode(self.encoding))
