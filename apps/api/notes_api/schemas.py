"""Pydantic schemas for API requests/responses.

Request bodies declare every field Optional: a missing field is a business
validation error (400 with a specific message) checked by the handler, not a
schema error.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================================================
# Envelopes
# ============================================================================


class ApiResponse(BaseModel):
    """Success envelope for every endpoint."""

    success: bool = True
    data: Any = None
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error envelope rendered by the exception handlers."""

    success: bool = False
    error: str
    code: str
    request_id: Optional[str] = None


def ok(data: Any = None, message: Optional[str] = None) -> dict[str, Any]:
    return ApiResponse(data=data, message=message).model_dump(mode="json")


# ============================================================================
# Auth
# ============================================================================


class LoginRequest(BaseModel):
    """Request body for POST /api/auth/login."""

    email: Optional[str] = Field(default=None, description="Account email")
    password: Optional[str] = Field(default=None, description="Account password")


class TenantOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    slug: str
    name: str
    subscription_plan: str
    created_at: datetime
    updated_at: datetime


class UserOut(BaseModel):
    """User as returned to clients (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    email: str
    role: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class UsageOut(BaseModel):
    notes_count: int
    notes_limit: Optional[int] = None
    can_create_more: bool


# ============================================================================
# Notes
# ============================================================================


class _NoteTextRequest(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None

    @field_validator("title", "content")
    @classmethod
    def require_utf8(cls, value: Optional[str]) -> Optional[str]:
        # Lone surrogates are valid JSON escapes but cannot be stored as UTF-8
        if value is not None:
            try:
                value.encode("utf-8")
            except UnicodeEncodeError:
                raise ValueError("must be valid UTF-8 text")
        return value


class NoteCreateRequest(_NoteTextRequest):
    """Request body for POST /api/notes."""


class NoteUpdateRequest(_NoteTextRequest):
    """Request body for PUT /api/notes/{note_id} (at least one field)."""


class NoteAuthorOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str


class NoteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    user_id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime
    user: Optional[NoteAuthorOut] = Field(default=None, validation_alias="author")


# ============================================================================
# Health
# ============================================================================


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: str
    version: str
    environment: str
    services: dict[str, str]
