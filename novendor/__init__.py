"""novendor: find vendored Go packages that nothing imports."""

__version__ = "0.1.0"

from novendor.calculator import run, unused_vendored_packages
from novendor.closure import all_imports, imports_in_package
from novendor.config import DEFAULT_PKG_REGEXPS, Config, Param, load_config
from novendor.gobuild import BuildContext, Resolver
from novendor.inventory import all_vendored_packages
from novendor.models import GoPackage, ResolveResult
from novendor.normalize import compile_patterns, transform_import_path
from novendor.splitter import resolve_all

__all__ = [
    "BuildContext",
    "Config",
    "DEFAULT_PKG_REGEXPS",
    "GoPackage",
    "Param",
    "ResolveResult",
    "Resolver",
    "all_imports",
    "all_vendored_packages",
    "compile_patterns",
    "imports_in_package",
    "load_config",
    "resolve_all",
    "run",
    "transform_import_path",
    "unused_vendored_packages",
]
