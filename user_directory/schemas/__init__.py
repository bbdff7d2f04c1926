# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Pydantic request/response schemas."""
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class UserCreate(BaseModel):
    """Body of a create request: the record fields minus id/createdAt."""
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    role: str = ""
    avatar: str = ""

    @field_validator("name", "email")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class UserUpdate(BaseModel):
    """Body of an update request: only the provided fields are sent."""
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    avatar: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
    request_id: Optional[str] = None
