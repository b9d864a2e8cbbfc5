"""go.mod module discovery."""

from __future__ import annotations

import re
from pathlib import Path

# module github.com/foo/bar
# module "github.com/foo/bar"
_MODULE_RE = re.compile(r'^module\s+"?([^"\s]+)"?')


def read_module_path(go_mod: Path) -> str | None:
    """Return the module path declared in *go_mod*, or None when absent or unreadable."""
    try:
        content = go_mod.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None
    for raw_line in content.splitlines():
        line = raw_line.split("//", 1)[0].strip()
        m = _MODULE_RE.match(line)
        if m:
            return m.group(1)
    return None


def find_module(directory: Path) -> tuple[Path, str] | None:
    """Find the module enclosing *directory*.

    Returns ``(module_root, module_path)``. A ``go.mod`` that sits inside a
    ``vendor`` directory of an outer module is skipped: vendored copies belong
    to the enclosing project, not to their upstream module. A ``vendor``
    component above the outermost module root does not count.
    """
    found: list[tuple[Path, str]] = []
    for candidate in (directory, *directory.parents):
        go_mod = candidate / "go.mod"
        if go_mod.is_file():
            module_path = read_module_path(go_mod)
            if module_path:
                found.append((candidate, module_path))

    for i, (root, module_path) in enumerate(found):
        vendored = any("vendor" in root.relative_to(outer).parts for outer, _ in found[i + 1 :])
        if not vendored:
            return root, module_path
    return None
