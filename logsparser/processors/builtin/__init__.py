"""Built-in post-processors."""

from logsparser.processors.builtin.display_message import DisplayMessageProcessor
from logsparser.processors.builtin.level import LevelProcessor
from logsparser.processors.builtin.timestamp import TimestampProcessor

__all__ = [
    "TimestampProcessor",
    "LevelProcessor",
    "DisplayMessageProcessor",
]
