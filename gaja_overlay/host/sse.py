"""Incremental decoder for the client's server-sent events stream."""

import codecs
import json
from typing import List, Optional

from ..logging_utils import get_logger

logger = get_logger("host.sse")


class SseDecoder:
    """Turns raw stream chunks into JSON status payloads.

    Messages are separated by a blank line; only ``data:`` fields are
    read, other fields and ``:`` comments are skipped.
    """

    def __init__(self):
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""

    def feed(self, chunk: bytes) -> List[dict]:
        text = self._decoder.decode(chunk)
        # normalize across the chunk boundary too
        self._buffer = (self._buffer + text).replace("\r\n", "\n")
        payloads = []
        while "\n\n" in self._buffer:
            message, self._buffer = self._buffer.split("\n\n", 1)
            payload = self._parse_message(message)
            if payload is not None:
                payloads.append(payload)
        return payloads

    @property
    def pending(self) -> str:
        return self._buffer

    def _parse_message(self, message: str) -> Optional[dict]:
        data_lines = []
        for line in message.split("\n"):
            if line.startswith("data:"):
                value = line[len("data:"):]
                if value.startswith(" "):
                    value = value[1:]
                data_lines.append(value)
        if not data_lines:
            return None

        raw = "\n".join(data_lines)
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse SSE JSON: {e}")
            logger.error(f"Raw JSON: {raw}")
            return None
        if not isinstance(payload, dict):
            logger.warning(f"Ignoring non-object SSE payload: {raw}")
            return None
        return payload
