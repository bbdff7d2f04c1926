# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Listing controller.
Keeps the local copy of the collection, the derived view, the delete
confirmation workflow and the child-info disclosure.
"""

from typing import List, Optional
from urllib.parse import parse_qs

from user_directory.core.config import settings
from user_directory.core.errors import DirectoryError
from user_directory.core.logging import get_logger
from user_directory.metrics import MUTATIONS
from user_directory.models.domain import ChildInfo, UserRecord
from user_directory.services import view_engine
from user_directory.services.collection_client import UserCollectionClient
from user_directory.services.notifier import NotificationChannel
from user_directory.services.view_engine import DirectoryView, ViewState

logger = get_logger(__name__)

LOAD_FAILED = "❌ Failed to load users. Please try again."
DELETE_OK = "✅ User deleted successfully!"
DELETE_FAILED = "❌ Failed to delete user"


class DirectoryController:
    """Client-side state over the remote user collection."""

    def __init__(self, client: UserCollectionClient,
                 notifications: Optional[NotificationChannel] = None,
                 page_size: Optional[int] = None) -> None:
        self._client = client
        self.notifications = notifications or NotificationChannel()
        self.records: List[UserRecord] = []
        self.loading = False
        self.pending_delete: Optional[str] = None
        self.selected_child: Optional[ChildInfo] = None
        self._state = ViewState(page_size=page_size or settings.PAGE_SIZE)

    # ── Loading ──

    async def load(self) -> None:
        self.loading = True
        try:
            records = await self._client.list()
        except DirectoryError as exc:
            logger.warning("Error fetching users: %s", exc)
            records = []
            self.notifications.show(LOAD_FAILED)
        finally:
            self.loading = False
        self.records = records
        self._state.set_records(records)

    async def mount(self, message: Optional[str] = None,
                    query_string: Optional[str] = None) -> None:
        """Surface a one-shot redirect message, then load; a load failure replaces it."""
        if message is None and query_string:
            message = parse_qs(query_string.lstrip("?")).get("message", [None])[0]
        if message:
            self.notifications.show(message)
        await self.load()

    # ── View ──

    @property
    def search_term(self) -> str:
        return self._state.search_term

    @property
    def role_filter(self) -> str:
        return self._state.role_filter

    @property
    def page_index(self) -> int:
        return self._state.page_index

    @property
    def view(self) -> DirectoryView:
        return self._state.compute()

    @property
    def show_pagination(self) -> bool:
        return self.view.page_count > 1

    def set_search(self, term: str) -> None:
        self._state.set_search(term)

    def set_role_filter(self, role: str) -> None:
        self._state.set_role_filter(role)

    def go_to_page(self, page_index: int) -> int:
        return self._state.go_to(page_index)

    def next_page(self) -> int:
        return self._state.go_to(self._state.page_index + 1)

    def previous_page(self) -> int:
        return self._state.go_to(self._state.page_index - 1)

    def role_options(self) -> List[tuple]:
        return [(role, view_engine.role_label(role)) for role in self.view.roles]

    @property
    def result_count(self) -> str:
        return view_engine.result_count_label(len(self.view.filtered))

    @property
    def search_summary(self) -> Optional[str]:
        return view_engine.search_summary(self.search_term, len(self.view.filtered))

    @property
    def empty_state(self) -> Optional[str]:
        return view_engine.empty_state(len(self.records), len(self.view.filtered))

    # ── Delete workflow: Idle -> PendingConfirmation -> Idle ──

    def request_delete(self, user_id: str) -> None:
        self.pending_delete = user_id

    def cancel_delete(self) -> None:
        self.pending_delete = None

    async def confirm_delete(self) -> bool:
        user_id = self.pending_delete
        if user_id is None:
            return False
        self.pending_delete = None
        try:
            await self._client.delete(user_id)
            deleted = True
        except DirectoryError as exc:
            logger.error("Error deleting user id=%s: %s", user_id, exc)
            deleted = False

        # Reload only once the delete has settled.
        await self.load()
        if deleted:
            MUTATIONS.labels(operation="delete", outcome="ok").inc()
            logger.info("User deleted id=%s", user_id)
            self.notifications.show(DELETE_OK)
        else:
            MUTATIONS.labels(operation="delete", outcome="failed").inc()
            self.notifications.show(DELETE_FAILED)
        return deleted

    # ── Child-info disclosure ──

    def show_child(self, user_id: str) -> Optional[ChildInfo]:
        record = next((r for r in self.records if r.id == user_id), None)
        self.selected_child = record.child if record else None
        return self.selected_child

    def close_child(self) -> None:
        self.selected_child = None

    def close(self) -> None:
        self.notifications.close()
