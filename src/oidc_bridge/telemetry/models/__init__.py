"""Pydantic models for telemetry events."""

from oidc_bridge.telemetry.models.audit import AuthEvent

__all__ = ["AuthEvent"]
