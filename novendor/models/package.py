"""Data models for Go package metadata."""

from __future__ import annotations

from dataclasses import dataclass, field

from novendor.exceptions import MultiplePackageError, ResolveError


@dataclass
class GoPackage:
    """Metadata for one package found in a directory."""

    import_path: str
    dir: str = ""
    name: str = ""  # empty when no buildable file was found
    go_files: list[str] = field(default_factory=list)
    cgo_files: list[str] = field(default_factory=list)
    test_go_files: list[str] = field(default_factory=list)
    xtest_go_files: list[str] = field(default_factory=list)
    ignored_go_files: list[str] = field(default_factory=list)  # excluded by build constraints
    invalid_go_files: list[str] = field(default_factory=list)
    imports: list[str] = field(default_factory=list)
    test_imports: list[str] = field(default_factory=list)
    xtest_imports: list[str] = field(default_factory=list)
    multiple_packages: bool = False

    def source_files(self) -> list[str]:
        """Production, test and external test files, in that order."""
        return self.go_files + self.test_go_files + self.xtest_go_files


@dataclass
class ResolveResult:
    """Best-effort outcome of a resolution: a package, a diagnostic, or both."""

    package: GoPackage | None = None
    error: ResolveError | None = None

    @property
    def import_path(self) -> str:
        return self.package.import_path if self.package is not None else ""

    @property
    def has_multiple_packages(self) -> bool:
        if self.package is not None and self.package.multiple_packages:
            return True
        return isinstance(self.error, MultiplePackageError)
