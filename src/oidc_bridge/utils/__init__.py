"""Shared utilities for oidc-bridge.

Import directly from submodules:
    from oidc_bridge.utils.file_helpers import load_validated_json
"""

__all__: list[str] = []  # Direct submodule imports required (see docstring)
