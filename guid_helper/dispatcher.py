"""Turn an inbound message text into the bot's reply messages."""
import logging
from typing import Awaitable, Callable

from guid_helper.codec import (
    embed_legacy_id,
    extract_legacy_id,
    guid_to_base64,
    is_legacy_compatible,
)
from guid_helper.constants import (
    BINDATA_TEMPLATE,
    DEFAULT_QUERY_FIELD,
    HELP_MESSAGE,
    QUERY_TEMPLATE,
    START_COMMAND,
)
from guid_helper.detector import Detection, DetectionKind, detect

logger = logging.getLogger(__name__)

ReplySender = Callable[[str], Awaitable[object]]

START_KIND = "start"


class UpdateDispatcher:
    """Routes message text through detection and conversion.

    The dispatcher holds configuration only, so a single instance can serve
    concurrent updates.
    """

    def __init__(
        self,
        include_query_templates: bool = True,
        query_field: str = DEFAULT_QUERY_FIELD,
    ):
        """Initialize the dispatcher.

        Args:
            include_query_templates: Also reply to GUID text with the MongoDB
                ``BinData`` literal and a single-field query document.
            query_field: Field name used in the query document.
        """
        self.include_query_templates = include_query_templates
        self.query_field = query_field

    def classify(self, text: str | None) -> tuple[str, list[str]]:
        """Return the message kind label and the replies for ``text``."""
        if not text:
            return DetectionKind.UNRECOGNIZED.value, []

        if text == START_COMMAND:
            return START_KIND, [HELP_MESSAGE]

        detection = detect(text)
        return detection.kind.value, self._render(detection)

    def replies_for(self, text: str | None) -> list[str]:
        """Return the reply messages for ``text`` in the order they are sent."""
        return self.classify(text)[1]

    def _render(self, detection: Detection) -> list[str]:
        if detection.kind in (
            DetectionKind.PADDED_BASE64,
            DetectionKind.UNPADDED_BASE64,
        ):
            return [str(detection.value)]

        if detection.kind == DetectionKind.GUID:
            guid = detection.value
            encoded = guid_to_base64(guid)
            replies = [encoded]
            if self.include_query_templates:
                bindata = BINDATA_TEMPLATE.format(base64=encoded)
                replies.append(bindata)
                replies.append(
                    QUERY_TEMPLATE.format(field=self.query_field, bindata=bindata)
                )
            if is_legacy_compatible(guid):
                replies.append(str(extract_legacy_id(guid)))
            return replies

        if detection.kind == DetectionKind.LEGACY_ID:
            return [str(embed_legacy_id(detection.value))]

        return []

    async def dispatch(
        self, text: str | None, send: ReplySender
    ) -> tuple[str, int]:
        """Send every reply for ``text`` through ``send``, one after another.

        Send failures are not caught here; the caller decides how to report
        them.

        Returns:
            The message kind label and the number of replies sent.
        """
        kind, replies = self.classify(text)
        logger.info(f"Message classified as {kind}, {len(replies)} replies")
        for reply in replies:
            await send(reply)
        return kind, len(replies)
