# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Create and edit workflows for a single user record.
Local conflicts block submission; remote failures keep the draft intact.
"""

from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import quote

from user_directory.core.config import settings
from user_directory.core.errors import DirectoryError, ValidationConflict
from user_directory.core.logging import get_logger
from user_directory.metrics import MUTATIONS
from user_directory.schemas import UserCreate, UserUpdate
from user_directory.services.collection_client import UserCollectionClient
from user_directory.services.uniqueness import UniquenessValidator

logger = get_logger(__name__)

LISTING_PATH = "/"

FIX_ERRORS = "❌ Please fix the errors before submitting."
MISSING_FIELDS = "❌ Please fill in all required fields."
CREATE_FAILED = "❌ Failed to add user. Please try again."
CREATE_OK = "✅ User added successfully!"
LOAD_FAILED = "Failed to load user data. Please try again."
UPDATE_FAILED = "❌ Failed to update user. Please try again."
UPDATE_OK = "✅ User updated successfully!"


@dataclass(frozen=True)
class Redirect:
    """Navigation back to the listing carrying a one-shot message."""
    location: str
    message: str

    @property
    def url(self) -> str:
        return f"{self.location}?message={quote(self.message)}"


def _log_alert(message: str) -> None:
    logger.error("Operator alert: %s", message)


class _UserForm:
    def __init__(self, client: UserCollectionClient,
                 debounce: Optional[float] = None,
                 exclude_id: Optional[str] = None) -> None:
        self._client = client
        self.name = ""
        self.email = ""
        self.role = ""
        self.submitting = False
        self.name_check = UniquenessValidator(client, "name", debounce, exclude_id)
        self.email_check = UniquenessValidator(client, "email", debounce, exclude_id)

    @property
    def name_warning(self) -> str:
        return self.name_check.warning

    @property
    def email_warning(self) -> str:
        return self.email_check.warning

    def set_name(self, value: str) -> None:
        self.name = value
        self.name_check.on_change(value)

    def set_email(self, value: str) -> None:
        self.email = value
        self.email_check.on_change(value)

    def set_role(self, value: str) -> None:
        self.role = value

    def ensure_submittable(self) -> None:
        """Raise ValidationConflict for warnings or blank required fields."""
        conflicts = tuple(
            check.field for check in (self.name_check, self.email_check) if check.warning
        )
        if conflicts:
            raise ValidationConflict(FIX_ERRORS, conflicts)
        missing = tuple(
            f for f in ("name", "email", "role") if not getattr(self, f).strip()
        )
        if missing:
            raise ValidationConflict(MISSING_FIELDS, missing)

    def close(self) -> None:
        self.name_check.close()
        self.email_check.close()


class CreateUserForm(_UserForm):
    def __init__(self, client: UserCollectionClient,
                 debounce: Optional[float] = None,
                 avatar_url: Optional[str] = None) -> None:
        super().__init__(client, debounce)
        self._avatar_url = avatar_url or settings.DEFAULT_AVATAR_URL
        self.error = ""

    async def submit(self) -> Optional[Redirect]:
        self.error = ""
        try:
            self.ensure_submittable()
        except ValidationConflict as exc:
            MUTATIONS.labels(operation="create", outcome="blocked").inc()
            self.error = str(exc)
            return None

        self.submitting = True
        try:
            created = await self._client.create(UserCreate(
                name=self.name, email=self.email, role=self.role,
                avatar=self._avatar_url,
            ))
        except DirectoryError as exc:
            MUTATIONS.labels(operation="create", outcome="failed").inc()
            logger.error("Error creating user name=%s: %s", self.name, exc)
            self.error = CREATE_FAILED
            return None
        finally:
            self.submitting = False

        MUTATIONS.labels(operation="create", outcome="ok").inc()
        logger.info("User created id=%s name=%s", created.id, created.name)
        self.close()
        return Redirect(LISTING_PATH, CREATE_OK)


class EditUserForm(_UserForm):
    """
    Loads the record on entry. A failed load leaves a persistent error and
    nothing to retry; a failed submit alerts the operator and stays open.
    """

    def __init__(self, client: UserCollectionClient, user_id: str,
                 debounce: Optional[float] = None,
                 alert: Optional[Callable[[str], None]] = None) -> None:
        super().__init__(client, debounce, exclude_id=user_id)
        self.user_id = user_id
        self._alert = alert or _log_alert
        self.loading = True
        self.error = ""

    async def load(self) -> bool:
        self.loading = True
        try:
            record = await self._client.get(self.user_id)
        except DirectoryError as exc:
            logger.warning("Error fetching user id=%s: %s", self.user_id, exc)
            self.error = LOAD_FAILED
            return False
        finally:
            self.loading = False
        # Populate the draft directly; unchanged loaded values are not re-checked.
        self.name = record.name or ""
        self.email = record.email or ""
        self.role = record.role or ""
        return True

    async def submit(self) -> Optional[Redirect]:
        if self.error:
            return None
        try:
            self.ensure_submittable()
        except ValidationConflict as exc:
            MUTATIONS.labels(operation="update", outcome="blocked").inc()
            self._alert(str(exc))
            return None

        self.submitting = True
        try:
            await self._client.update(self.user_id, UserUpdate(
                name=self.name, email=self.email, role=self.role,
            ))
        except DirectoryError as exc:
            MUTATIONS.labels(operation="update", outcome="failed").inc()
            logger.error("Error updating user id=%s: %s", self.user_id, exc)
            self._alert(UPDATE_FAILED)
            return None
        finally:
            self.submitting = False

        MUTATIONS.labels(operation="update", outcome="ok").inc()
        logger.info("User updated id=%s", self.user_id)
        self.close()
        return Redirect(LISTING_PATH, UPDATE_OK)
