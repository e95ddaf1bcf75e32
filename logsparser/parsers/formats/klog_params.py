"""Go klog parameters parser.

Parses the parameters (key-values) part of a klog message, or a whole
logfmt-style line::

    count=2 object="container-registry-enforce" kind="ClusterPolicy" target={"name":"foo"}

https://kubernetes.io/docs/concepts/cluster-administration/system-logs/
https://github.com/kubernetes/klog/tree/main/textlogger
"""

from logsparser.exceptions import ParseError
from logsparser.message import StructuredMessage
from logsparser.parsers.base import BaseParser, ParseOutcome, ParserMetadata
from logsparser.parsers.params import KeyValueScanner
from logsparser.parsers.registry import register_parser


@register_parser
class GoKlogParamsParser(BaseParser):
    """Parser for klog key-value parameters.

    Keys may contain spaces (``BSL name=default``), since some producers
    emit them that way.
    """

    def __init__(self, debug: bool = False):
        super().__init__(debug=debug)
        self._scanner = KeyValueScanner(debug=debug)

    @classmethod
    def get_metadata(cls) -> ParserMetadata:
        return ParserMetadata(
            name="go_klog_params",
            display_name="Go klog parameters",
            description="Key-value parameters of klog and logfmt-style lines",
            priority=200,
        )

    def parse(self, message: StructuredMessage) -> ParseOutcome:
        remainder = message.unparsed_remainder
        try:
            scanned = self._scanner.scan(remainder, lenient=True)
        except ParseError as e:
            return ParseOutcome.failed(e)

        if scanned.chars == 0:
            return ParseOutcome.declined()

        message.merge_properties(scanned.properties)
        message.shrink_remainder(remainder[scanned.chars:])
        return ParseOutcome.ok()
