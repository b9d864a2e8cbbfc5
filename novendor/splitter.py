"""Multi-package directory splitter.

A directory may hold several packages that are mutually exclusive under build
constraints, e.g. a library alongside a ``//go:build ignore`` generator
declaring ``package main``. Resolving such a directory in all-files mode
reports a package-name conflict; this module peels the packages apart one at
a time by hiding the files already accounted for.
"""

from __future__ import annotations

from collections.abc import Collection

import structlog

from novendor.gobuild.resolver import Resolver, is_standard_import
from novendor.models.package import GoPackage

log = structlog.get_logger("novendor.splitter")


def resolve_all(
    resolver: Resolver,
    import_path: str,
    src_dir: str,
    visited: Collection[str],
    *,
    all_files: bool | None = None,
) -> list[GoPackage]:
    """Return every package found for *import_path* as seen from *src_dir*.

    Standard library paths yield nothing. Packages whose import path is already
    in *visited* are not returned. Resolution diagnostics other than the
    package-name conflict are ignored and the partial result is used.
    """
    if is_standard_import(import_path):
        return []

    pkgs: list[GoPackage] = []
    ignore_files: frozenset[str] = frozenset()
    while True:
        result = resolver.resolve(import_path, src_dir, ignore_files, all_files=all_files)
        pkg = result.package
        if pkg is None or not pkg.import_path:
            if result.error is not None:
                log.debug("splitter.unresolved", import_path=import_path, src_dir=src_dir, error=str(result.error))
            break

        if pkg.import_path in visited:
            break

        if not result.has_multiple_packages:
            if result.error is not None:
                log.debug("splitter.partial", import_path=pkg.import_path, error=str(result.error))
            pkgs.append(pkg)
            break

        invalid = frozenset(pkg.invalid_go_files)
        valid = frozenset(f for f in pkg.source_files() if f not in invalid)
        if not valid:
            # Remaining files never form a valid package on their own (e.g. cgo-only files).
            log.debug("splitter.no_valid_files", import_path=pkg.import_path, dir=pkg.dir)
            break

        log.debug(
            "splitter.multiple_packages",
            import_path=pkg.import_path,
            package=pkg.name,
            files=sorted(valid),
        )
        isolated = resolver.resolve(import_path, src_dir, ignore_files | invalid, all_files=all_files)
        if isolated.import_path:
            pkgs.append(isolated.package)

        ignore_files = ignore_files | valid
    return pkgs
