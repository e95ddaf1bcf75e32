"""Processor runner for executing post-processors.

Manages registration and ordered execution of post-processors against
parsed messages.
"""

import logging
from typing import Any, Type

from logsparser.message import StructuredMessage
from logsparser.processors.base import BaseProcessor

logger = logging.getLogger(__name__)


class ProcessorRunner:
    """Manages and executes post-processors."""

    def __init__(self):
        self._processors: dict[str, BaseProcessor] = {}

    def register(self, processor: BaseProcessor) -> None:
        """Register a processor.

        Args:
            processor: Processor instance to register
        """
        name = processor.name

        if name in self._processors:
            logger.warning(f"Processor '{name}' already registered, replacing")

        self._processors[name] = processor
        logger.debug(f"Registered processor: {name}")

    def register_class(self, processor_class: Type[BaseProcessor]) -> None:
        """Register a processor class (instantiates it)."""
        self.register(processor_class())

    def unregister(self, name: str) -> bool:
        """Unregister a processor.

        Returns:
            True if processor was found and removed
        """
        return self._processors.pop(name, None) is not None

    def get(self, name: str) -> BaseProcessor | None:
        """Get a processor by name."""
        return self._processors.get(name)

    def get_processors(self) -> list[BaseProcessor]:
        """Enabled processors, sorted by priority."""
        processors = [p for p in self._processors.values() if p.enabled]
        return sorted(processors, key=lambda x: x.priority)

    def list_processors(self) -> list[dict[str, Any]]:
        """List all registered processors."""
        return [
            {
                "name": processor.name,
                "description": processor.description,
                "enabled": processor.enabled,
                "priority": processor.priority,
            }
            for processor in sorted(
                self._processors.values(),
                key=lambda proc: proc.priority
            )
        ]

    def run(self, message: StructuredMessage) -> list[str]:
        """Run all enabled processors against a message.

        Args:
            message: Parsed message, mutated in place

        Returns:
            Names of the processors that changed the message
        """
        changed = []
        for processor in self.get_processors():
            if processor.process(message):
                changed.append(processor.name)
        return changed


# Global runner instance
_runner: ProcessorRunner | None = None


def get_runner() -> ProcessorRunner:
    """Get the global processor runner."""
    global _runner
    if _runner is None:
        _runner = ProcessorRunner()
    return _runner


def load_builtin_processors(runner: ProcessorRunner | None = None) -> ProcessorRunner:
    """Register the built-in processors.

    Args:
        runner: Runner to register into, defaults to the global runner

    Returns:
        The runner
    """
    from logsparser.processors.builtin import (
        DisplayMessageProcessor,
        LevelProcessor,
        TimestampProcessor,
    )

    if runner is None:
        runner = get_runner()
    for processor_class in (TimestampProcessor, LevelProcessor, DisplayMessageProcessor):
        if runner.get(processor_class().name) is None:
            runner.register_class(processor_class)

    logger.debug(f"Loaded {len(runner._processors)} built-in processors")
    return runner
