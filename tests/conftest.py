"""Pytest fixtures and configuration for logsparser tests."""

from collections.abc import Callable

import pytest

from logsparser.config import Settings
from logsparser.main import create_app
from logsparser.message import StructuredMessage
from logsparser.parsers.registry import ParserRegistry, get_registry, load_builtin_parsers
from logsparser.pipeline import LogsParser
from logsparser.processors.runner import ProcessorRunner, load_builtin_processors

KLOG_PREFIX = "E0123 12:34:56.789       42 pkg/main4ever.go:123]"


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Override settings for testing."""
    return Settings(
        app_name="logsparser-test",
        debug=False,
        log_level="WARNING",
        report_parse_errors=True,
    )


# =============================================================================
# Pipeline Fixtures
# =============================================================================


@pytest.fixture
def builtin_registry() -> ParserRegistry:
    """Global registry with the built-in parsers loaded."""
    load_builtin_parsers()
    return get_registry()


@pytest.fixture
def processor_runner() -> ProcessorRunner:
    """Fresh runner with the built-in post-processors."""
    return load_builtin_processors(ProcessorRunner())


@pytest.fixture
def logs_parser(
    test_settings: Settings,
    builtin_registry: ParserRegistry,
    processor_runner: ProcessorRunner,
) -> LogsParser:
    """LogsParser wired like the application."""
    return create_app(test_settings, registry=builtin_registry, runner=processor_runner)


# =============================================================================
# Message Fixtures
# =============================================================================


@pytest.fixture
def make_message() -> Callable[[str], StructuredMessage]:
    """Factory creating a message the way the pipeline entry point does."""
    return StructuredMessage.from_line


@pytest.fixture
def klog_line() -> Callable[[str], str]:
    """Factory building a klog line with a fixed metadata prefix."""

    def _build(payload: str = "") -> str:
        return f"{KLOG_PREFIX} {payload}" if payload else KLOG_PREFIX

    return _build


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external services)")
