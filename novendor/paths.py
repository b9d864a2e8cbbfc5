"""Working-directory helpers shared by the inventory and the calculator."""

from __future__ import annotations

import os

from novendor.exceptions import ProjectIOError


def working_directory() -> str:
    try:
        return os.getcwd()
    except OSError as e:
        raise ProjectIOError(".", "failed to determine working directory") from e


def abs_path(path: str, wd: str | None = None) -> str:
    """Make *path* absolute against *wd* (default: the working directory)."""
    if os.path.isabs(path):
        return os.path.normpath(path)
    return os.path.normpath(os.path.join(wd or working_directory(), path))


def abs_paths(paths: list[str], wd: str) -> list[str]:
    return [abs_path(p, wd) for p in paths]
