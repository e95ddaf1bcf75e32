"""Level post-processor."""

import json

from logsparser.message import (
    LEVEL_DEBUG,
    LEVEL_ERROR,
    LEVEL_INFO,
    LEVEL_WARN,
    StructuredMessage,
)
from logsparser.processors.base import BaseProcessor

LEVEL_ALIASES = {
    "debug": LEVEL_DEBUG,
    "info": LEVEL_INFO,
    "warning": LEVEL_WARN,
    "warn": LEVEL_WARN,
    "error": LEVEL_ERROR,
    "err": LEVEL_ERROR,
    "crit": LEVEL_ERROR,
    "critical": LEVEL_ERROR,
    "fatal": LEVEL_ERROR,
}


def normalize_level(value: str) -> str:
    """Map a severity word to a canonical level, or return it unchanged."""
    return LEVEL_ALIASES.get(value.lower(), value)


class LevelProcessor(BaseProcessor):
    """Override the message level with a ``level`` property.

    The property is assumed to be more accurate than the level taken from
    the line prefix.
    """

    @property
    def name(self) -> str:
        return "level"

    @property
    def description(self) -> str:
        return "Promote the level property to the message level"

    @property
    def priority(self) -> int:
        return 20

    def process(self, message: StructuredMessage) -> bool:
        value = message.properties.get("level")
        if value is None:
            return False

        # Numeric levels (pino, bunyan) pass through as their JSON text
        if not isinstance(value, str):
            value = json.dumps(value, separators=(",", ":"))
        message.level = normalize_level(value)
        del message.properties["level"]
        return True
