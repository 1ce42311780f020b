"""Telemetry for oidc-bridge.

- system/: Operational system logger (stderr + system.jsonl)
- audit/: Authentication audit trail (auth.jsonl)
- models/: Pydantic models for audit events
"""

__all__: list[str] = []
