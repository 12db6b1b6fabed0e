# candy/core/StatusMessage.py
"""Transient one-line notice shown on the message line.

Expiry is evaluated when the frame is rendered by comparing wall-clock
timestamps; nothing is scheduled.
"""

import logging
import time
from typing import Callable, Optional

DEFAULT_TIMEOUT = 3.0

logger = logging.getLogger("candy")


class StatusMessage:
    def __init__(self, timeout: float = DEFAULT_TIMEOUT, clock: Callable[[], float] = time.time) -> None:
        self.timeout = timeout
        self._clock = clock
        self.text: str = ""
        self.set_at: float = 0.0

    def set(self, text: str) -> None:
        """Replaces the message and restarts its expiry clock."""
        self.text = str(text)
        self.set_at = self._clock()
        logger.info(f"Status message set to: '{self.text}'")

    def clear(self) -> None:
        self.text = ""

    def visible(self, now: Optional[float] = None) -> str:
        """The text while ``now < set_at + timeout``, else an empty string."""
        if not self.text:
            return ""
        if now is None:
            now = self._clock()
        if now - self.set_at < self.timeout:
            return self.text
        return ""
