"""Display message post-processor."""

import json

from logsparser.message import StructuredMessage
from logsparser.processors.base import BaseProcessor

DISPLAY_MESSAGE_KEYS = ["msg", "message"]


class DisplayMessageProcessor(BaseProcessor):
    """Promote ``msg`` or ``message`` to the display message if none is set."""

    @property
    def name(self) -> str:
        return "display_message"

    @property
    def description(self) -> str:
        return "Promote msg/message properties to the display message"

    @property
    def priority(self) -> int:
        return 30

    def process(self, message: StructuredMessage) -> bool:
        if message.display_message is not None:
            return False

        for key in DISPLAY_MESSAGE_KEYS:
            value = message.properties.get(key)
            if value is None:
                continue
            if isinstance(value, str):
                message.display_message = value
            else:
                message.display_message = json.dumps(value, separators=(",", ":"))
            del message.properties[key]
            return True

        return False
