# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Debounced uniqueness checks for the name and email fields.
"""

import asyncio
from typing import Optional, Set

from user_directory.core.config import settings
from user_directory.core.errors import DirectoryError
from user_directory.core.logging import get_logger
from user_directory.metrics import UNIQUENESS_CHECKS
from user_directory.services.collection_client import UserCollectionClient

logger = get_logger(__name__)

FIELD_WARNINGS = {
    "name": "⚠️ This name already exists. Please choose another name.",
    "email": "⚠️ This email already exists. Please use another email.",
}


class UniquenessValidator:
    """
    Watches one draft field and flags values already taken in the collection.

    Every change replaces the single pending timer. When the quiet window
    elapses the full collection is fetched and scanned case-insensitively.
    A request already in flight cannot be aborted, so each check carries the
    generation it was scheduled for and only the newest one may write the
    warning.
    """

    def __init__(self, client: UserCollectionClient, field: str,
                 delay: Optional[float] = None,
                 exclude_id: Optional[str] = None) -> None:
        if field not in FIELD_WARNINGS:
            raise ValueError(f"field must be one of {tuple(FIELD_WARNINGS)}")
        self._client = client
        self.field = field
        self._delay = settings.VALIDATION_DEBOUNCE_SECONDS if delay is None else delay
        self.exclude_id = exclude_id
        self.warning = ""
        self._generation = 0
        self._timer: Optional[asyncio.TimerHandle] = None
        self._checks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._timer is not None or bool(self._checks)

    def on_change(self, value: str) -> None:
        self._generation += 1
        self._cancel_timer()
        if not value.strip():
            self.warning = ""
            return
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._delay, self._fire, value, self._generation)

    async def wait_idle(self) -> None:
        """Wait until no timer is armed and no check is in flight."""
        while self.pending:
            if self._checks:
                await asyncio.gather(*self._checks, return_exceptions=True)
            else:
                await asyncio.sleep(self._delay / 4 or 0.01)

    def close(self) -> None:
        self._generation += 1
        self._cancel_timer()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, value: str, generation: int) -> None:
        self._timer = None
        task = asyncio.ensure_future(self._check(value, generation))
        self._checks.add(task)
        task.add_done_callback(self._checks.discard)

    async def _check(self, value: str, generation: int) -> None:
        try:
            records = await self._client.list()
        except DirectoryError as exc:
            UNIQUENESS_CHECKS.labels(field=self.field, result="failed").inc()
            logger.warning("Error checking %s: %s", self.field, exc)
            return

        if generation != self._generation:
            UNIQUENESS_CHECKS.labels(field=self.field, result="stale").inc()
            return

        probe = value.lower()
        taken = any(
            getattr(record, self.field).lower() == probe
            for record in records
            if record.id != self.exclude_id
        )
        UNIQUENESS_CHECKS.labels(field=self.field, result="taken" if taken else "free").inc()
        self.warning = FIELD_WARNINGS[self.field] if taken else ""
