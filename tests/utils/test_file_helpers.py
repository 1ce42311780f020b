"""Tests for file helpers."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from oidc_bridge.utils.file_helpers import require_file_exists, write_json_atomic


class TestWriteJsonAtomic:
    def test_writes_and_replaces(self, tmp_path: Path) -> None:
        path = tmp_path / "data.json"

        write_json_atomic(path, {"a": 1})
        write_json_atomic(path, {"b": 2})

        assert json.loads(path.read_text()) == {"b": 2}

    def test_failed_write_keeps_original_and_cleans_up(self, tmp_path: Path) -> None:
        """A failure before the replace leaves the old file and no temp file."""
        # Arrange
        path = tmp_path / "data.json"
        write_json_atomic(path, {"a": 1})

        # Act
        with patch("oidc_bridge.utils.file_helpers.os.replace", side_effect=OSError("boom")):
            with pytest.raises(OSError, match="boom"):
                write_json_atomic(path, {"b": 2})

        # Assert
        assert json.loads(path.read_text()) == {"a": 1}
        assert [p.name for p in tmp_path.iterdir()] == ["data.json"]


class TestRequireFileExists:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Clients file not found"):
            require_file_exists(tmp_path / "clients.json", file_type="clients")
