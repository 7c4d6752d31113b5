"""
Review Board Backend — Pydantic Request/Response Schemas
=========================================================

What:  Pydantic models defining the JSON contract of the review API.
How:   FastAPI validates request bodies against the request models and
       serializes responses through the response models.

Text Fields:
    JSON allows escapes for lone UTF-16 surrogates ("\\ud800") that cannot
    be encoded as UTF-8. They are replaced with U+FFFD on the way in, so
    the stored text is always valid UTF-8.

Strictness:
    Request models use strict mode so a rating of "5", 5.5 or true is a
    client-input error (400) instead of being silently coerced. Unknown
    keys are ignored, so a client that echoes a full review object (id
    included) back to POST /reviews is still accepted.
"""

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# SQLite INTEGER is a signed 64-bit value
SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1

_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What the client sends
# ══════════════════════════════════════════════════════════════════════════


class ReviewCreate(BaseModel):
    """
    Body of POST /reviews.

    Omitted fields fall back to their zero values, so a body without a
    rating is rejected by the 1..5 range check rather than by the schema.
    """
    model_config = ConfigDict(strict=True)

    name: str = Field(default="", description="Author name (free text)")
    review: str = Field(default="", description="Review body (free text)")
    rating: int = Field(default=0, description="Star rating, 1 to 5")

    @field_validator("name", "review", mode="before")
    @classmethod
    def replace_lone_surrogates(cls, v):
        """Swap unencodable surrogate code points for U+FFFD; non-strings fall through to strict checking."""
        if isinstance(v, str):
            return _LONE_SURROGATE.sub("\ufffd", v)
        return v


class ReviewDelete(BaseModel):
    """Body of DELETE /delete-review."""
    model_config = ConfigDict(strict=True)

    id: int = Field(
        ge=SQLITE_INT_MIN,
        le=SQLITE_INT_MAX,
        description="Id of the review to remove (signed 64-bit)",
    )


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns
# ══════════════════════════════════════════════════════════════════════════


class ReviewResponse(BaseModel):
    """One element of the GET /reviews array."""
    id: int = Field(description="Id assigned at creation")
    name: str = Field(description="Author name, exactly as submitted")
    review: str = Field(description="Review body, exactly as submitted")
    rating: int = Field(description="Star rating, 1 to 5")

    model_config = {"from_attributes": True}


class CreateReviewResponse(BaseModel):
    """Returned by POST /reviews."""
    success: bool = Field(default=True)
    id: int = Field(description="Id assigned to the new review")


class SuccessResponse(BaseModel):
    """Returned by DELETE /delete-review."""
    success: bool = Field(default=True)


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error body for every non-2xx response.

    Example:
        {
            "error": "validation_error",
            "message": "Invalid rating value. Must be between 1 and 5.",
            "details": {"field": "rating"},
            "request_id": "1f0c9a2b"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
