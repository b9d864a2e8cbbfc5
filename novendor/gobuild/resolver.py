"""Package metadata resolver — locates a package directory and reads its Go files.

Mirrors the subset of Go's ``go/build`` Import behaviour that matters for
reachability: vendor-directory search, GOPATH and module layouts, package
clause grouping, test and external-test split, and build constraints.
"""

from __future__ import annotations

import os
from dataclasses import replace
from pathlib import Path

import structlog

from novendor.exceptions import (
    GoParseError,
    MultiplePackageError,
    NoGoError,
    PackageNotFoundError,
    ResolveError,
)
from novendor.gobuild.constraints import ConstraintSyntaxError, good_os_arch_file, should_build
from novendor.gobuild.context import BuildContext
from novendor.gobuild.gomod import find_module
from novendor.gobuild.parser import GoSyntaxError, parse_header
from novendor.models.package import GoPackage, ResolveResult

log = structlog.get_logger("novendor.gobuild")


def is_local_import(import_path: str) -> bool:
    return (
        import_path in (".", "..")
        or import_path.startswith(("./", "../"))
        or os.path.isabs(import_path)
    )


def is_standard_import(import_path: str) -> bool:
    """Heuristic: standard library paths never contain a dot."""
    return "." not in import_path


def _has_go_files(directory: Path) -> bool:
    try:
        with os.scandir(directory) as it:
            return any(e.name.endswith(".go") and not e.is_dir() for e in it)
    except OSError:
        return False


class Resolver:
    """Resolve an import path, seen from a source directory, to package metadata."""

    def __init__(self, context: BuildContext | None = None) -> None:
        self.context = context or BuildContext.from_env()

    def resolve(
        self,
        import_path: str,
        src_dir: str,
        ignore_files: frozenset[str] | set[str] = frozenset(),
        *,
        all_files: bool | None = None,
    ) -> ResolveResult:
        """Resolve *import_path* as imported from a file in *src_dir*.

        Files named in *ignore_files* are treated as absent. *all_files*
        overrides the context's ``use_all_files`` for this call.
        """
        ctx = self.context if all_files is None else replace(self.context, use_all_files=all_files)
        src = Path(os.path.abspath(src_dir))

        if is_local_import(import_path):
            directory = Path(os.path.normpath(src / import_path))
            pkg_path = self.import_path_for_dir(directory)
            if not directory.is_dir():
                return ResolveResult(
                    GoPackage(import_path=pkg_path, dir=str(directory)),
                    PackageNotFoundError(pkg_path, [str(directory)]),
                )
        else:
            found, searched = self._find(import_path, src)
            if found is None:
                return ResolveResult(None, PackageNotFoundError(import_path, searched))
            directory, pkg_path = found

        return self._scan(pkg_path, directory, ignore_files, ctx)

    # ── locating directories ──

    def import_path_for_dir(self, directory: Path) -> str:
        """Canonical import path of *directory*: GOPATH-relative, module-relative, or ``_`` + path."""
        for root in self.context.gopath_src_roots():
            if directory != root and directory.is_relative_to(root):
                return directory.relative_to(root).as_posix()
        module = find_module(directory)
        if module is not None:
            module_root, module_path = module
            rel = directory.relative_to(module_root).as_posix()
            return module_path if rel == "." else f"{module_path}/{rel}"
        return "_" + directory.as_posix()

    def _vendor_search_dirs(self, src: Path) -> list[Path]:
        """Directories whose ``vendor`` child is visible from *src*, innermost first."""
        for root in self.context.gopath_src_roots():
            if src != root and src.is_relative_to(root):
                # GOPATH/src/vendor itself is not a vendor directory
                return [d for d in (src, *src.parents) if d != root and d.is_relative_to(root)]
        module = find_module(src)
        if module is not None:
            module_root = module[0]
            return [d for d in (src, *src.parents) if d.is_relative_to(module_root)]
        return []

    def _find(self, import_path: str, src: Path) -> tuple[tuple[Path, str] | None, list[str]]:
        searched: list[str] = []

        for parent in self._vendor_search_dirs(src):
            candidate = parent / "vendor" / import_path
            if candidate.is_dir() and _has_go_files(candidate):
                return (candidate, self.import_path_for_dir(candidate)), searched
            searched.append(f"{candidate} (vendor tree)")

        for root in self.context.gopath_src_roots():
            candidate = root / import_path
            if candidate.is_dir():
                return (candidate, import_path), searched
            searched.append(f"{candidate} (from $GOPATH)")

        module = find_module(src)
        if module is not None:
            module_root, module_path = module
            if import_path == module_path or import_path.startswith(module_path + "/"):
                candidate = module_root / import_path[len(module_path) :].lstrip("/")
                if candidate.is_dir():
                    return (candidate, import_path), searched
                searched.append(f"{candidate} (from module {module_path})")

        return None, searched

    # ── reading files ──

    def _scan(
        self,
        pkg_path: str,
        directory: Path,
        ignore_files: frozenset[str] | set[str],
        ctx: BuildContext,
    ) -> ResolveResult:
        pkg = GoPackage(import_path=pkg_path, dir=str(directory))
        first_error: ResolveError | None = None
        first_file = ""
        imports: set[str] = set()
        test_imports: set[str] = set()
        xtest_imports: set[str] = set()

        def bad_file(name: str, err: ResolveError) -> None:
            nonlocal first_error
            pkg.invalid_go_files.append(name)
            if first_error is None:
                first_error = err

        try:
            with os.scandir(directory) as it:
                names = sorted(e.name for e in it if not e.is_dir())
        except OSError as e:
            return ResolveResult(pkg, ResolveError(f"cannot read directory {directory}: {e}"))

        for name in names:
            if name in ignore_files or not name.endswith(".go") or name.startswith(("_", ".")):
                continue
            if not ctx.use_all_files and not good_os_arch_file(name, ctx):
                pkg.ignored_go_files.append(name)
                continue

            try:
                src = (directory / name).read_text(encoding="utf-8", errors="replace")
                header = parse_header(src)
            except (OSError, GoSyntaxError) as e:
                bad_file(name, GoParseError(name, str(e)))
                continue

            if not ctx.use_all_files:
                try:
                    keep = should_build(header.go_build, header.plus_build, ctx)
                except ConstraintSyntaxError as e:
                    log.debug("resolver.bad_constraint", file=str(directory / name), error=str(e))
                    keep = False
                if not keep:
                    pkg.ignored_go_files.append(name)
                    continue

            pkg_name = header.package
            if pkg_name == "documentation":
                pkg.ignored_go_files.append(name)
                continue

            is_test = name.endswith("_test.go")
            is_xtest = False
            if is_test and pkg_name.endswith("_test") and pkg.name != pkg_name:
                is_xtest = True
                pkg_name = pkg_name[: -len("_test")]

            if not pkg.name:
                pkg.name = pkg_name
                first_file = name
            elif pkg_name != pkg.name:
                pkg.multiple_packages = True
                bad_file(
                    name,
                    MultiplePackageError(str(directory), [pkg.name, pkg_name], [first_file, name]),
                )
                continue

            if "C" in header.imports:
                if is_test:
                    bad_file(name, GoParseError(name, "use of cgo in test not supported"))
                    continue
                if ctx.cgo_enabled:
                    pkg.cgo_files.append(name)
                    imports.update(header.imports)
                else:
                    pkg.ignored_go_files.append(name)
            elif is_xtest:
                pkg.xtest_go_files.append(name)
                xtest_imports.update(header.imports)
            elif is_test:
                pkg.test_go_files.append(name)
                test_imports.update(header.imports)
            else:
                pkg.go_files.append(name)
                imports.update(header.imports)

        pkg.imports = sorted(imports)
        pkg.test_imports = sorted(test_imports)
        pkg.xtest_imports = sorted(xtest_imports)

        if first_error is not None:
            return ResolveResult(pkg, first_error)
        if not (pkg.go_files or pkg.cgo_files or pkg.test_go_files or pkg.xtest_go_files):
            return ResolveResult(pkg, NoGoError(str(directory)))
        return ResolveResult(pkg)
