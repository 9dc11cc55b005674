"""Shared pytest fixtures for the full aozoratxt test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.fixture_paths import write_sample_archive


@pytest.fixture
def sample_archive_path(tmp_path: Path) -> Path:
    """Provide a Shift_JIS (cp932) archive file with CRLF line endings."""

    return write_sample_archive(tmp_path)


@pytest.fixture
def utf8_archive_path(tmp_path: Path) -> Path:
    """Provide the same archive file encoded as UTF-8."""

    return write_sample_archive(tmp_path, name="wagahai-utf8.txt", encoding="utf-8")
