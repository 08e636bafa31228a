# tests/unit/logging/test_unit_handlers.py
"""Tests for logging/handlers.py."""

from __future__ import annotations

import pytest

from contentengine.logging.handlers import create_rotating_handler, parse_size


class TestParseSize:
    @pytest.mark.parametrize("value,expected", [
        ("10MB", 10 * 1024**2),
        ("512kb", 512 * 1024),
        ("1 GB", 1024**3),
    ])
    def test_valid(self, value: str, expected: int):
        assert parse_size(value) == expected

    def test_invalid(self):
        with pytest.raises(ValueError, match="Invalid size format"):
            parse_size("ten megs")


class TestCreateRotatingHandler:
    def test_creates_parent_dirs(self, tmp_path):
        handler = create_rotating_handler(tmp_path / "a" / "b" / "out.log", "1KB", 3)
        try:
            assert (tmp_path / "a" / "b").is_dir()
            assert handler.maxBytes == 1024
            assert handler.backupCount == 3
        finally:
            handler.close()
