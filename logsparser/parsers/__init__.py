"""logsparser structural parser system.

Provides the scanners and the ordered set of parsers that turn a klog or
JSON log line into a StructuredMessage.
"""

from logsparser.parsers.base import BaseParser, ParseOutcome, ParserMetadata
from logsparser.parsers.registry import (
    ParserRegistry,
    get_registry,
    load_builtin_parsers,
    register_parser,
)

__all__ = [
    "BaseParser",
    "ParseOutcome",
    "ParserMetadata",
    "ParserRegistry",
    "get_registry",
    "load_builtin_parsers",
    "register_parser",
]
