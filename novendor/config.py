"""Configuration — raw user settings and their validated, compiled form."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path

from novendor.exceptions import ConfigError
from novendor.normalize import compile_patterns

# Group packages by hosting service + org + repository
DEFAULT_PKG_REGEXPS: list[str] = [
    r"github\.com/[^/]+/[^/]+",
    r"golang\.org/[^/]+/[^/]+",
    r"gopkg\.in/[^/]+",
    r"github\.[^/]+/[^/]+/[^/]+",
]

# JSON key -> (attribute, expected type)
_CONFIG_KEYS: dict[str, tuple[str, type]] = {
    "pkgRegexps": ("pkg_regexps", list),
    "includeVendorInImportPath": ("include_vendor_in_import_path", bool),
    "ignorePkgs": ("ignore_pkgs", list),
}


@dataclass
class Config:
    """User-facing settings, as given on the command line or in a config file."""

    pkg_regexps: list[str] = field(default_factory=list)
    include_vendor_in_import_path: bool = False
    ignore_pkgs: list[str] = field(default_factory=list)

    def to_param(self) -> Param:
        """Validate and compile. Raises PatternError for a bad expression."""
        return Param(
            pkg_regexps=compile_patterns(self.pkg_regexps),
            include_vendor_in_import_path=self.include_vendor_in_import_path,
            ignore_pkgs=list(self.ignore_pkgs),
        )


@dataclass
class Param:
    """Compiled settings consumed by the calculator and reporter."""

    pkg_regexps: list[re.Pattern[str]] = field(default_factory=list)
    include_vendor_in_import_path: bool = False
    ignore_pkgs: list[str] = field(default_factory=list)


def load_config(path: str | Path) -> Config:
    """Load a JSON config file using the keys ``pkgRegexps``,
    ``includeVendorInImportPath`` and ``ignorePkgs``.
    """
    try:
        data = json.loads(Path(path).read_text())
    except OSError as e:
        raise ConfigError(f"failed to read config file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a JSON object")

    config = Config()
    for key, value in data.items():
        if key not in _CONFIG_KEYS:
            raise ConfigError(f"unknown key '{key}' in config file {path}")
        attr, expected = _CONFIG_KEYS[key]
        if not isinstance(value, expected):
            raise ConfigError(f"'{key}' in config file {path} must be a {expected.__name__}")
        if expected is list and not all(isinstance(v, str) for v in value):
            raise ConfigError(f"'{key}' in config file {path} must be a list of strings")
        setattr(config, attr, value)
    return config
