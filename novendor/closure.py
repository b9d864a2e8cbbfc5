"""Import closure builder — transitive non-standard imports of a package."""

from __future__ import annotations

import os

import structlog

from novendor.gobuild.resolver import Resolver
from novendor.splitter import resolve_all

log = structlog.get_logger("novendor.closure")


def _within(directory: str, root: str) -> bool:
    rel = os.path.relpath(directory, root)
    return rel != ".." and not rel.startswith(".." + os.sep)


def all_imports(
    resolver: Resolver,
    import_path: str,
    src_dir: str,
    project_root: str,
    visited: set[str],
    include_tests: bool,
) -> set[str]:
    """Return the packages reachable from *import_path*, including itself.

    *visited* is shared across the whole traversal and marks packages whose
    imports have already been expanded. Packages inside *project_root* resolve
    their own imports relative to their directory (so nested vendor trees are
    honoured) and, when *include_tests* is set, contribute test imports too.
    Test imports of dependencies are never followed.
    """
    imported: set[str] = set()

    for pkg in resolve_all(resolver, import_path, src_dir, visited):
        imported.add(pkg.import_path)
        visited.add(pkg.import_path)

        pkg_src_dir = src_dir
        pkg_imports = list(pkg.imports)
        if pkg.dir and _within(pkg.dir, project_root):
            pkg_src_dir = pkg.dir
            if include_tests:
                pkg_imports += pkg.test_imports
                pkg_imports += pkg.xtest_imports

        for child in pkg_imports:
            if child in visited:
                continue
            imported |= all_imports(resolver, child, pkg_src_dir, project_root, visited, False)
    return imported


def imports_in_package(resolver: Resolver, pkg_dir: str, project_root: str) -> set[str]:
    """Closure of the package in *pkg_dir*, including its tests' imports."""
    visited: set[str] = set()
    imported = all_imports(resolver, ".", pkg_dir, project_root, visited, True)
    log.debug("closure.computed", package_dir=pkg_dir, count=len(imported))
    return imported