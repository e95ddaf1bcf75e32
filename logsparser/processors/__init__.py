"""logsparser post-processing system.

Canonicalizes parsed messages:
- Epoch/ISO-8601 time properties become the message timestamp
- Level properties override the prefix level
- msg/message properties become the display message
"""

from logsparser.processors.base import BaseProcessor
from logsparser.processors.runner import ProcessorRunner, get_runner, load_builtin_processors

__all__ = [
    "BaseProcessor",
    "ProcessorRunner",
    "get_runner",
    "load_builtin_processors",
]
