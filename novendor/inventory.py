"""Vendor inventory builder — every package present in a vendor tree."""

from __future__ import annotations

import os
import stat

import structlog

from novendor.exceptions import InvalidVendorDirError, ProjectIOError
from novendor.gobuild.resolver import Resolver
from novendor.paths import abs_path
from novendor.splitter import resolve_all

log = structlog.get_logger("novendor.inventory")


def all_vendored_packages(resolver: Resolver, vendor_dir: str) -> set[str]:
    """Return the import paths of all packages in *vendor_dir*.

    The path must name a directory called ``vendor``. Returned import paths
    include the vendor directory itself, e.g. a vendor directory in
    ``github.com/org/repo`` holding ``github.com/org/vendored`` yields
    ``github.com/org/repo/vendor/github.com/org/vendored``. Packages are
    found without regard to build constraints; dot-prefixed directories are
    skipped.
    """
    vendor_abs = abs_path(vendor_dir)
    if os.path.basename(vendor_abs) != "vendor":
        raise InvalidVendorDirError(
            vendor_abs, f"provided path must be a directory named 'vendor', was {vendor_abs}"
        )
    try:
        st = os.stat(vendor_abs)
    except FileNotFoundError as e:
        raise InvalidVendorDirError(vendor_abs, f"vendor directory {vendor_abs} does not exist") from e
    except OSError as e:
        raise ProjectIOError(vendor_abs, "failed to stat") from e
    if not stat.S_ISDIR(st.st_mode):
        raise InvalidVendorDirError(vendor_abs, f"path {vendor_abs} is not a directory")

    def _on_error(err: OSError) -> None:
        raise ProjectIOError(err.filename or vendor_abs, "failed to walk directory") from err

    import_paths: set[str] = set()
    for dirpath, dirnames, _ in os.walk(vendor_abs, onerror=_on_error):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))

        pkgs = resolve_all(resolver, ".", dirpath, set(), all_files=True)
        if not any(pkg.name for pkg in pkgs):
            continue
        import_paths.add(pkgs[0].import_path)
        log.debug("inventory.package_found", import_path=pkgs[0].import_path, dir=dirpath)
    return import_paths
