"""
Overlay configuration.

Environment variables use the CODEGRAPH_GRAPHQL_ prefix.
Example: CODEGRAPH_GRAPHQL_SCHEMA_PATH, CODEGRAPH_GRAPHQL_TAG
"""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from codegraph_graphql.template.tag_matcher import TagCondition

LOG_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})


class OverlaySettings(BaseSettings):
    """
    GraphQL overlay settings.

    Attributes:
        schema_path: SDL or introspection JSON file (None: overlay inert)
        tag: Tag name, or comma-separated tag names (None: every template)
        log_level: Logging level name
        json_logs: Render logs as JSON lines
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CODEGRAPH_GRAPHQL_",
        extra="ignore",
    )

    schema_path: Path | None = None
    tag: str | None = None
    log_level: str = "INFO"
    json_logs: bool = False

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(LOG_LEVELS)}, got {value!r}")
        return level

    @property
    def tag_condition(self) -> TagCondition | None:
        """Single name, or a frozenset when several names are given"""
        if not self.tag:
            return None
        names = [name.strip() for name in self.tag.split(",") if name.strip()]
        if not names:
            return None
        if len(names) == 1:
            return names[0]
        return frozenset(names)
