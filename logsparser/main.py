"""logsparser - application wiring.

Builds a LogsParser from settings: registers the built-in parsers and
post-processors and configures logging.
"""

import logging

from logsparser.config import Settings, get_settings
from logsparser.parsers.registry import ParserRegistry, get_registry, load_builtin_parsers
from logsparser.pipeline import LogsParser, ParsePipeline
from logsparser.processors.runner import ProcessorRunner, load_builtin_processors

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure stdlib logging from settings."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format=settings.log_format,
    )


def create_app(
    settings: Settings | None = None,
    registry: ParserRegistry | None = None,
    runner: ProcessorRunner | None = None,
) -> LogsParser:
    """Create a LogsParser wired with the built-in stages.

    Args:
        settings: Settings to use, defaults to the cached environment settings
        registry: Parser registry, defaults to the global registry with
            built-in parsers loaded
        runner: Post-processor runner, defaults to a new runner with the
            built-in processors

    Returns:
        Configured LogsParser
    """
    settings = settings or get_settings()
    configure_logging(settings)

    if registry is None:
        load_builtin_parsers()
        registry = get_registry()
    if runner is None:
        runner = load_builtin_processors(ProcessorRunner())

    parsers = registry.create_parsers(debug=settings.debug)
    logger.info(
        "Starting %s v%s with parsers: %s",
        settings.app_name,
        settings.app_version,
        ", ".join(parser.name for parser in parsers),
    )

    pipeline = ParsePipeline(parsers, report_errors=settings.report_parse_errors)
    return LogsParser(pipeline, runner)
