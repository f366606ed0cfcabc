"""Syslog line parsing into structured log messages."""

from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass

log = logging.getLogger(__name__)

_SYSLOG_LINE = re.compile(r"^<\d+>(\w+ \d+ \d+:\d+:\d+)\s+(\S+)\s+(\S+)\s+(.*)")


@dataclass
class Message:
    """One log record: timestamp, originating host, program tag and text."""

    date: str
    host: str
    program: str
    message: str

    @classmethod
    def empty(cls) -> Message:
        """Return a message whose fields are all empty strings."""
        return cls("", "", "", "")

    @classmethod
    def from_text(cls, text: str) -> Message | None:
        """Parse a syslog line such as ``<14>Jul 16 19:11:07 host prog: text``.

        Returns None when the line does not have that shape.
        """
        match = _SYSLOG_LINE.match(text)
        if match is None:
            log.warning("Failed to capture groups")
            return None
        return cls(*match.groups())

    @classmethod
    def from_payload(cls, payload: bytes) -> Message | None:
        """Decode a UTF-8 queue payload and parse it as a syslog line.

        Raises UnicodeDecodeError when the payload is not valid UTF-8.
        """
        return cls.from_text(bytes(payload).decode("utf-8"))

    def to_dict(self) -> dict[str, str]:
        """Return the fields as a plain dictionary."""
        return asdict(self)