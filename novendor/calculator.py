"""Unused-package calculator — vendor inventory minus everything reachable."""

from __future__ import annotations

import os
import re
from typing import IO

import structlog

from novendor.closure import imports_in_package
from novendor.config import Param
from novendor.gobuild.context import BuildContext
from novendor.gobuild.resolver import Resolver
from novendor.inventory import all_vendored_packages
from novendor.normalize import transform_import_path
from novendor.paths import abs_path, abs_paths, working_directory
from novendor.report import format_unused, write_json, write_text

log = structlog.get_logger("novendor.calculator")


def unused_vendored_packages(
    resolver: Resolver,
    project_dir: str,
    pkgs: list[str],
    ignore_pkgs: list[str],
    patterns: list[re.Pattern[str]],
) -> dict[str, set[str]]:
    """Map each root's vendor directory to its normalized, never-imported packages.

    Only the vendor directories directly under *pkgs* are inventoried. The
    closures of both *pkgs* and *ignore_pkgs* are subtracted, so the
    dependencies of ignored packages are never reported either.
    """
    wd = working_directory()
    project_dir = abs_path(project_dir, wd)

    pkg_dirs = abs_paths(pkgs, wd)
    vendor_dirs: dict[str, set[str]] = {}
    for pkg_dir in pkg_dirs:
        vendor_dir = os.path.join(pkg_dir, "vendor")
        if not os.path.isdir(vendor_dir):
            continue
        vendored = all_vendored_packages(resolver, vendor_dir)
        vendor_dirs[vendor_dir] = {transform_import_path(p, patterns) for p in vendored}
        log.debug("calculator.inventory", vendor_dir=vendor_dir, count=len(vendor_dirs[vendor_dir]))

    # Appended after the inventory so that vendor directories of ignored packages are never inventoried.
    for pkg_dir in pkg_dirs + abs_paths(ignore_pkgs, wd):
        for import_path in imports_in_package(resolver, pkg_dir, project_dir):
            normalized = transform_import_path(import_path, patterns)
            for vendored in vendor_dirs.values():
                vendored.discard(normalized)
    return vendor_dirs


def run(
    project_dir: str,
    pkgs: list[str],
    param: Param,
    out: IO[str],
    *,
    context: BuildContext | None = None,
    output_format: str = "text",
) -> list[str]:
    """Compute the unused vendored packages and write them to *out*.

    Returns the reported import paths. Nothing is written when a fatal error
    is raised.
    """
    resolver = Resolver(context)
    unused = unused_vendored_packages(resolver, project_dir, pkgs, param.ignore_pkgs, param.pkg_regexps)
    lines = format_unused(unused, param.include_vendor_in_import_path)
    log.info("calculator.done", vendor_dirs=len(unused), unused=len(lines))

    if output_format == "json":
        write_json(unused, param.include_vendor_in_import_path, out)
    else:
        write_text(lines, out)
    return lines
