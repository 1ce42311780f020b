"""Pydantic models for authentication audit logs.

IMPORTANT: The 'time' field is Optional[str] = None because:
- Model instances are created WITHOUT timestamps (time=None)
- ISO8601Formatter adds the timestamp during log serialization
- Logged events ALWAYS have a 'time' field in ISO 8601 format
"""

from __future__ import annotations

__all__ = ["AuthEvent"]

from typing import Literal

from pydantic import BaseModel, Field


class AuthEvent(BaseModel):
    """
    One authentication log entry (logs/audit/auth.jsonl).

    One event is written per authentication attempt handled by the bridge.

    Note: 'time' is None when created, populated by ISO8601Formatter during logging.
    """

    time: str | None = Field(
        None,
        description="ISO 8601 timestamp, added by formatter during serialization",
    )

    event_type: Literal[
        "authentication_succeeded",
        "authentication_failed",
    ]
    status: Literal["Success", "Failure"]

    # --- who / where ---
    subject_id: str | None = None  # hashed before writing
    client_id: str | None = None
    auth_source: str | None = None

    # --- outcome ---
    user_created: bool | None = None
    attribute_count: int | None = None

    # --- errors ---
    error_type: str | None = None
    error_message: str | None = None

    message: str | None = None
