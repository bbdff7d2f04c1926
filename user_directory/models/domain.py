# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models: pure data structures, NO FastAPI dependency.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChildInfo(BaseModel):
    """Child details attached to some user records."""
    firstname: str = ""
    lastname: str = ""

    @field_validator("firstname", "lastname", mode="before")
    @classmethod
    def null_as_blank(cls, v):
        return "" if v is None else v


class UserRecord(BaseModel):
    """A user as stored in the hosted collection."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(..., description="Identifier assigned by the remote store")
    created_at: str = Field(default="", alias="createdAt")
    name: str = Field(..., description="Display name, unique case-insensitively")
    email: str = Field(..., description="Email, unique case-insensitively")
    role: str = Field(default="", description="Free-text role")
    avatar: str = Field(default="", description="Avatar URL")
    child: Optional[ChildInfo] = None

    @field_validator("created_at", "role", "avatar", mode="before")
    @classmethod
    def null_as_blank(cls, v):
        return "" if v is None else v
