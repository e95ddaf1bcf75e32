"""Parser registry for dynamic parser loading and ordering.

The registry maintains the collection of available structural parsers
and builds the ordered parser list a pipeline runs.
"""

import logging
from typing import Type

from logsparser.parsers.base import BaseParser

logger = logging.getLogger(__name__)


class ParserRegistry:
    """Central registry for structural parsers."""

    def __init__(self):
        self._parsers: dict[str, Type[BaseParser]] = {}

    def register(self, parser_class: Type[BaseParser]) -> None:
        """Register a parser class.

        Args:
            parser_class: Parser class to register
        """
        name = parser_class().name

        if name in self._parsers:
            logger.warning(f"Parser '{name}' already registered, overwriting")

        self._parsers[name] = parser_class
        logger.debug(f"Registered parser: {name}")

    def unregister(self, name: str) -> bool:
        """Unregister a parser by name.

        Returns:
            True if parser was found and removed
        """
        return self._parsers.pop(name, None) is not None

    def get(self, name: str, debug: bool = False) -> BaseParser | None:
        """Get a parser instance by name."""
        parser_class = self._parsers.get(name)
        return parser_class(debug=debug) if parser_class else None

    def create_parsers(self, debug: bool = False) -> list[BaseParser]:
        """Instantiate all registered parsers in pipeline order.

        Args:
            debug: Debug flag passed to every parser

        Returns:
            Parser instances, highest priority first
        """
        parsers = [parser_class(debug=debug) for parser_class in self._parsers.values()]
        return sorted(parsers, key=lambda parser: parser.priority, reverse=True)

    def list_parsers(self) -> list[dict]:
        """List all registered parsers in pipeline order."""
        return [
            {
                "name": parser.name,
                "description": parser.description,
                "priority": parser.priority,
            }
            for parser in self.create_parsers()
        ]


# Global registry instance
_registry = ParserRegistry()


def get_registry() -> ParserRegistry:
    """Get the global parser registry."""
    return _registry


def register_parser(parser_class: Type[BaseParser]) -> Type[BaseParser]:
    """Decorator to register a parser class.

    Usage:
        @register_parser
        class MyParser(BaseParser):
            ...
    """
    _registry.register(parser_class)
    return parser_class


def load_builtin_parsers() -> None:
    """Load all built-in parsers.

    Importing the format modules triggers their registration.
    """
    from logsparser.parsers.formats import json as json_parser, klog_params, klog_prefix  # noqa: F401

    logger.debug(f"Loaded {len(_registry._parsers)} built-in parsers")
