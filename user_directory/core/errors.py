# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Failure taxonomy shared by the collection client and the workflows."""
from typing import Optional


class DirectoryError(Exception):
    """Base class for every directory failure."""


class NetworkFailure(DirectoryError):
    """The request could not complete, or the remote answered non-2xx."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotFound(NetworkFailure):
    def __init__(self, user_id: str):
        super().__init__(f"User {user_id} not found", status_code=404)
        self.user_id = user_id


class ValidationConflict(DirectoryError):
    """Duplicate or missing field detected locally, never sent upstream."""

    def __init__(self, message: str, fields: tuple = ()):
        super().__init__(message)
        self.fields = tuple(fields)
