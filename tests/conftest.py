"""Shared pytest fixtures for novendor tests — Go source trees on disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import pytest

from novendor.gobuild.context import BuildContext
from novendor.gobuild.resolver import Resolver

PROJECT_IMPORT = "github.com/acme/project"


@pytest.fixture
def write_tree() -> Callable[[Path, dict[str, str]], None]:
    """Return a helper that writes ``{relative path: source}`` under a root."""

    def _write(root: Path, files: dict[str, str]) -> None:
        for rel, src in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(src)

    return _write


@pytest.fixture
def gopath(tmp_path: Path) -> Path:
    path = tmp_path / "gopath"
    (path / "src").mkdir(parents=True)
    return path


@pytest.fixture
def project(gopath: Path) -> Path:
    """Project directory whose import path is PROJECT_IMPORT."""
    path = gopath / "src" / PROJECT_IMPORT
    path.mkdir(parents=True)
    return path


@pytest.fixture
def context(gopath: Path) -> BuildContext:
    return BuildContext(goos="linux", goarch="amd64", gopath=(str(gopath),))


@pytest.fixture
def resolver(context: BuildContext) -> Resolver:
    return Resolver(context)


@pytest.fixture(autouse=True)
def _drop_log_handler():
    """Undo setup_logging: its stderr handler outlives the stream it was bound to."""
    yield
    root = logging.getLogger()
    for handler in [h for h in root.handlers if h.get_name() == "default"]:
        root.removeHandler(handler)
    logging.getLogger("novendor").setLevel(logging.NOTSET)
