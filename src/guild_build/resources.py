from __future__ import annotations

import sys
from pathlib import Path


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[2]


def is_frozen() -> bool:
    return bool(getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS"))


def bundled_base_dir() -> Path:
    """
    Base directory for bundled resources.

    Frozen: PyInstaller extraction dir (sys._MEIPASS)
    Dev: repo root
    """
    if is_frozen():
        return Path(sys._MEIPASS)  # type: ignore[attr-defined]
    return _repo_root()


def resource_path(rel: str) -> Path:
    """
    Resolve a resource path relative to the bundled base directory.
    Use this for read-only shipped resources (the sample rating table).
    """
    return (bundled_base_dir() / rel).resolve()
