"""Custom exceptions for novendor."""


class NovendorError(Exception):
    """Base exception for all novendor errors."""


# ── Fatal errors ──


class ConfigError(NovendorError):
    """Raised when the configuration is malformed."""


class PatternError(ConfigError):
    """Raised when a grouping expression does not compile."""

    def __init__(self, expr: str, reason: str):
        self.expr = expr
        super().__init__(f"failed to compile expression {expr}: {reason}")


class InvalidVendorDirError(ConfigError):
    """Raised when a vendor inventory path is not a directory named 'vendor'."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(reason)


class ProjectIOError(NovendorError):
    """Raised when the file tree cannot be read. Always carries the offending path."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{message}: {path}")


# ── Resolution diagnostics (carried in ResolveResult, never raised by the core) ──


class ResolveError(NovendorError):
    """Base class for package resolution diagnostics."""


class PackageNotFoundError(ResolveError):
    def __init__(self, import_path: str, searched: list[str]):
        self.import_path = import_path
        self.searched = searched
        locations = "".join(f"\n\t{s}" for s in searched)
        super().__init__(f"cannot find package {import_path!r} in:{locations}")


class NoGoError(ResolveError):
    def __init__(self, directory: str):
        self.directory = directory
        super().__init__(f"no buildable Go source files in {directory}")


class GoParseError(ResolveError):
    def __init__(self, filename: str, reason: str):
        self.filename = filename
        super().__init__(f"{filename}: {reason}")


class MultiplePackageError(ResolveError):
    """A directory holds files declaring different package names."""

    def __init__(self, directory: str, packages: list[str], files: list[str]):
        self.directory = directory
        self.packages = packages
        self.files = files
        super().__init__(
            f"found packages {packages[0]} ({files[0]}) and {packages[1]} ({files[1]}) in {directory}"
        )
