from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def make_tree(tmp_path: Path):
    """Create directories (trailing '/') and files below tmp_path."""

    def _make(*entries: str) -> Path:
        for entry in entries:
            target = tmp_path / entry
            if entry.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_bytes(b"x" * 100)
        return tmp_path

    return _make
