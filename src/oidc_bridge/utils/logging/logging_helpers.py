"""Logging helper utilities.

Provides generic utilities for telemetry logging:
- Event serialization (audit event model_dump with consistent options)
- Sensitive identifier hashing for audit trails
"""

from __future__ import annotations

__all__ = [
    "hash_auth_event_ids",
    "hash_sensitive_id",
    "serialize_audit_event",
]

import copy
import hashlib
from typing import Any

from pydantic import BaseModel


def serialize_audit_event(event: BaseModel) -> dict[str, Any]:
    """Serialize a Pydantic event model for audit logging.

    - Excludes the 'time' field (added by ISO8601Formatter at log time)
    - Excludes None values for cleaner logs
    - Uses JSON mode so datetimes and enums are log-safe

    Args:
        event: Pydantic model instance (e.g., AuthEvent).

    Returns:
        dict: Serialized event data ready for logging.
    """
    return event.model_dump(mode="json", exclude={"time"}, exclude_none=True)


def hash_sensitive_id(value: str, prefix_length: int = 8) -> str:
    """Hash a sensitive ID for logging while preserving some identifiability.

    The hash is deterministic, so the same user always produces the same
    value and log lines can still be correlated.

    Args:
        value: The sensitive ID to hash (e.g., a user identifier).
        prefix_length: Number of hex characters to keep (default: 8).

    Returns:
        str: Hashed value in format "sha256:<prefix>".

    Example:
        >>> hash_sensitive_id("u1@example.org")  # doctest: +SKIP
        'sha256:3f1c9a0b'
    """
    if not value:
        return "sha256:empty"

    digest = hashlib.sha256(value.encode("utf-8")).hexdigest()
    return f"sha256:{digest[:prefix_length]}"


def hash_auth_event_ids(event_data: dict[str, Any]) -> dict[str, Any]:
    """Hash sensitive IDs in an auth event dict before logging.

    The original dict is not modified.

    Hashed fields:
    - subject_id: Stable user identifier derived from source attributes

    Args:
        event_data: Serialized auth event dictionary.

    Returns:
        dict: New dictionary with sensitive IDs hashed.
    """
    result = copy.deepcopy(event_data)

    if result.get("subject_id"):
        result["subject_id"] = hash_sensitive_id(result["subject_id"])

    return result
