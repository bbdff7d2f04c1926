# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Transient, auto-expiring status messages."""
import asyncio
from typing import Optional

from user_directory.core.config import settings
from user_directory.core.logging import get_logger
from user_directory.metrics import NOTIFICATIONS_SHOWN

logger = get_logger(__name__)


class NotificationChannel:
    """
    Holds at most one message. Each message gets its own expiry timer tagged
    with a generation number, so a timer left over from an older message
    never clears a newer one.
    """

    def __init__(self, ttl: Optional[float] = None) -> None:
        self._ttl = settings.NOTIFICATION_TTL_SECONDS if ttl is None else ttl
        self._message: Optional[str] = None
        self._generation = 0
        self._timer: Optional[asyncio.TimerHandle] = None

    @property
    def current(self) -> Optional[str]:
        return self._message

    def show(self, message: str) -> None:
        self._generation += 1
        self._message = message
        NOTIFICATIONS_SHOWN.inc()
        logger.info("Notification: %s", message)
        loop = asyncio.get_running_loop()
        self._cancel_timer()
        self._timer = loop.call_later(self._ttl, self._expire, self._generation)

    def clear(self) -> None:
        self._generation += 1
        self._message = None

    def close(self) -> None:
        self._cancel_timer()
        self.clear()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _expire(self, generation: int) -> None:
        if generation == self._generation:
            self._message = None
            self._timer = None
