"""Built-in structural parsers."""

from logsparser.parsers.formats.json import GenericJSONParser
from logsparser.parsers.formats.klog_params import GoKlogParamsParser
from logsparser.parsers.formats.klog_prefix import GoKlogPrefixParser

__all__ = [
    "GoKlogPrefixParser",
    "GoKlogParamsParser",
    "GenericJSONParser",
]
