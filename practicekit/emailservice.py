"""A simple e-mail service that validates addresses and reports what it sends."""

from __future__ import annotations

import re
import sys
from typing import TextIO

_EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")


class InvalidEmailError(ValueError):
    """Raised for a malformed e-mail address."""

    def __init__(self, address: str) -> None:
        super().__init__("invalid email address")
        self.address = address


def is_valid_email(address: str) -> bool:
    """Return whether ``address`` looks like a valid e-mail address."""
    return _EMAIL_PATTERN.fullmatch(address) is not None


class BasicEmailService:
    """Sends e-mails by writing a line describing each one to ``out``."""

    def __init__(self, out: TextIO | None = None) -> None:
        self._out = out

    def send_transactional_email(self, to: str, body: str) -> None:
        """Send a transactional e-mail."""
        self._send("transactional", to, body)

    def send_promotional_email(self, to: str, body: str) -> None:
        """Send a promotional e-mail."""
        self._send("promotional", to, body)

    def _send(self, kind: str, to: str, body: str) -> None:
        if not is_valid_email(to):
            raise InvalidEmailError(to)
        out = self._out if self._out is not None else sys.stdout
        print(f"Sent {kind} email to {to}: {body}", file=out)