from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for building ZIP archives, marker files and
   configuration dictionaries.
"""

import io
import os
import sys
import zipfile
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Union

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

ZipContent = Mapping[str, Union[str, bytes]]


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def build_zip(path: Path, entries: ZipContent) -> Path:
    """
    Write a ZIP file whose entries are stored under the exact given names.

    Names are not sanitized, which allows crafting traversal entries
    such as '../evil.txt'.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return path


def zip_bytes(entries: ZipContent) -> bytes:
    """Return the bytes of an in-memory ZIP, used to nest archives."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return buf.getvalue()


def snapshot_tree(root: Path) -> set:
    """Relative paths of every file and directory below root."""
    return {p.relative_to(root).as_posix() for p in root.rglob("*")}


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_zip() -> Callable[[Path, ZipContent], Path]:
    """Expose build_zip as a fixture."""
    return build_zip


@pytest.fixture
def marker_file(tmp_path: Path) -> Callable[[str], Path]:
    """Factory writing a marker list file and returning its path."""
    def _write(content: str, name: str = "markers.txt") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def scenario_tree(tmp_path: Path) -> Path:
    """
    Build the reference scan scenario.

    Structure:
    /root
      a.txt       "contains secretkey here"
      data.zip    -> b.txt "nothing interesting"
    """
    root = tmp_path / "root"
    root.mkdir()
    (root / "a.txt").write_text("contains secretkey here", encoding="utf-8")
    build_zip(root / "data.zip", {"b.txt": "nothing interesting"})
    return root


@pytest.fixture
def mock_config_dict(tmp_path: Path) -> Dict[str, Any]:
    """
    Return a complete configuration dictionary for testing.

    Mirrors the keys defined in 'stringfinder.domain.config'.
    """
    return {
        "input_path": str(tmp_path / "root"),
        "marker_file": str(tmp_path / "markers.txt"),
        "output_path": "",
        "skip_expansion": False,
        "archive_extension": ".zip",
        "encoding": "utf-8",
        "json_output": False,
        "log_file": "",
    }


@pytest.fixture
def zip_payload() -> Callable[[ZipContent], bytes]:
    """Expose zip_bytes as a fixture, for archives nested in archives."""
    return zip_bytes


@pytest.fixture
def tree_snapshot() -> Callable[[Path], set]:
    """Expose snapshot_tree as a fixture."""
    return snapshot_tree
