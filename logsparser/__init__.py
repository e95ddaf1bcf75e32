"""logsparser - normalize klog and JSON log lines into structured messages."""

from logsparser.message import StructuredMessage
from logsparser.pipeline import LogsParser, ParsePipeline

__all__ = [
    "LogsParser",
    "ParsePipeline",
    "StructuredMessage",
]
