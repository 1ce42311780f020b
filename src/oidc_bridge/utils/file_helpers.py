"""Shared file utilities for oidc-bridge.

Provides common utilities used by config and the JSON-file repositories:
- get_app_dir: OS-appropriate application directory
- set_secure_permissions: Secure file/directory permissions
- require_file_exists: Friendly FileNotFoundError
- load_validated_json: JSON + Pydantic validation with readable errors
- write_json_atomic: Replace a JSON file without leaving partial writes
"""

from __future__ import annotations

import json
import os
import sys
import tempfile
from pathlib import Path
from typing import Any, TypeVar

from platformdirs import user_config_dir
from pydantic import BaseModel, ValidationError

from oidc_bridge.constants import APP_NAME

# Type variable for Pydantic models
T = TypeVar("T", bound=BaseModel)

__all__ = [
    "get_app_dir",
    "load_validated_json",
    "require_file_exists",
    "set_secure_permissions",
    "write_json_atomic",
]


def get_app_dir() -> Path:
    """Get the OS-appropriate application directory.

    Uses platformdirs.user_config_dir() which returns:
    - macOS: ~/Library/Application Support/oidc-bridge
    - Linux: ~/.config/oidc-bridge (XDG compliant)
    - Windows: C:\\Users\\<user>\\AppData\\Local\\oidc-bridge

    Returns:
        Path to the application directory.
    """
    return Path(user_config_dir(APP_NAME))


def set_secure_permissions(path: Path, *, is_directory: bool = False) -> None:
    """Set secure permissions on file or directory.

    Sets permissions to restrict access to owner only:
    - Directory: 0o700 (rwx------)
    - File: 0o600 (rw-------)

    Does nothing on Windows. Silently ignores permission errors
    (some systems don't allow permission changes).

    Args:
        path: Path to file or directory.
        is_directory: If True, use directory permissions (0o700).
    """
    if sys.platform == "win32":
        return

    try:
        mode = 0o700 if is_directory else 0o600
        path.chmod(mode)
    except OSError:
        pass  # Permission changes might fail on some systems


def require_file_exists(file_path: Path, file_type: str = "file") -> None:
    """Raise FileNotFoundError with helpful message if file doesn't exist.

    Args:
        file_path: Path to check.
        file_type: Description for error message (e.g., "configuration").

    Raises:
        FileNotFoundError: If file doesn't exist.
    """
    if file_path.exists():
        return

    raise FileNotFoundError(f"{file_type.capitalize()} file not found at {file_path}.")


def load_validated_json(
    file_path: Path,
    model_class: type[T],
    file_type: str = "file",
    recovery_hint: str | None = None,
) -> T:
    """Load JSON file and validate against Pydantic model.

    Combines file reading, JSON parsing, and Pydantic validation with
    consistent error messages.

    Args:
        file_path: Path to JSON file.
        model_class: Pydantic model class to validate against.
        file_type: Description for error messages (e.g., "config").
        recovery_hint: Optional hint appended to validation errors.

    Returns:
        Validated Pydantic model instance.

    Raises:
        ValueError: If JSON is invalid or validation fails.
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {file_type} file {file_path}: {e}") from e
    except OSError as e:
        raise ValueError(f"Could not read {file_type} file {file_path}: {e}") from e

    try:
        return model_class.model_validate(data)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            errors.append(f"  - {loc}: {error['msg']}")

        hint = f"\n\n{recovery_hint}" if recovery_hint else ""
        raise ValueError(
            f"Invalid {file_type} configuration in {file_path}:\n" + "\n".join(errors) + hint
        ) from e


def write_json_atomic(file_path: Path, data: Any) -> None:
    """Write JSON to a file atomically.

    Writes to a temp file in the same directory, then os.replace() over the
    target, so readers never observe a half-written file.

    Args:
        file_path: Destination path.
        data: JSON-serializable data.

    Raises:
        OSError: If the directory cannot be created or the write fails.
    """
    file_path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
            f.write("\n")
        set_secure_permissions(Path(tmp_name))
        os.replace(tmp_name, file_path)
    except BaseException:
        # Clean up temp file; the original is untouched
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise
