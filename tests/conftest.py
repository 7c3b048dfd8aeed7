from __future__ import annotations

import io

from pathlib import Path

import pytest


@pytest.fixture
def write_bed(tmp_path: Path):
    """Write BED text to a file under `tmp_path` and return its path."""

    def _write(text: str, name: str = "regions.bed") -> Path:
        path = tmp_path / name
        path.write_bytes(text.encode("utf-8"))
        return path

    return _write


@pytest.fixture
def bed_stream():
    def _stream(text: str) -> io.BytesIO:
        return io.BytesIO(text.encode("utf-8"))

    return _stream
