"""Build context — the target configuration used to select Go source files."""

from __future__ import annotations

import os
import platform
import sys
from dataclasses import dataclass, field
from pathlib import Path

# Highest go1.N release tag considered satisfied
LATEST_GO_MINOR = 23

KNOWN_OS: frozenset[str] = frozenset(
    {
        "aix",
        "android",
        "darwin",
        "dragonfly",
        "freebsd",
        "hurd",
        "illumos",
        "ios",
        "js",
        "linux",
        "nacl",
        "netbsd",
        "openbsd",
        "plan9",
        "solaris",
        "wasip1",
        "windows",
        "zos",
    }
)

UNIX_OS: frozenset[str] = frozenset(
    {
        "aix",
        "android",
        "darwin",
        "dragonfly",
        "freebsd",
        "hurd",
        "illumos",
        "ios",
        "linux",
        "netbsd",
        "openbsd",
        "solaris",
    }
)

KNOWN_ARCH: frozenset[str] = frozenset(
    {
        "386",
        "amd64",
        "amd64p32",
        "arm",
        "armbe",
        "arm64",
        "arm64be",
        "loong64",
        "mips",
        "mipsle",
        "mips64",
        "mips64le",
        "mips64p32",
        "mips64p32le",
        "ppc",
        "ppc64",
        "ppc64le",
        "riscv",
        "riscv64",
        "s390",
        "s390x",
        "sparc",
        "sparc64",
        "wasm",
    }
)

_PLATFORM_TO_GOOS = {
    "linux": "linux",
    "darwin": "darwin",
    "win32": "windows",
    "cygwin": "windows",
    "freebsd": "freebsd",
    "openbsd": "openbsd",
    "netbsd": "netbsd",
    "sunos5": "solaris",
    "aix": "aix",
}

_MACHINE_TO_GOARCH = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
    "armv6l": "arm",
    "ppc64le": "ppc64le",
    "ppc64": "ppc64",
    "s390x": "s390x",
    "riscv64": "riscv64",
    "mips64": "mips64",
}


def _host_goos() -> str:
    for prefix, goos in _PLATFORM_TO_GOOS.items():
        if sys.platform.startswith(prefix):
            return goos
    return "linux"


def _host_goarch() -> str:
    return _MACHINE_TO_GOARCH.get(platform.machine().lower(), "amd64")


def _default_gopath() -> list[str]:
    env = os.environ.get("GOPATH")
    if env:
        return [p for p in env.split(os.pathsep) if p]
    return [str(Path.home() / "go")]


@dataclass(frozen=True)
class BuildContext:
    """Explicit replacement for Go's process-wide build.Default.

    ``use_all_files`` makes every ``.go`` file count regardless of build
    constraints, which is how dependencies are computed by default so that
    platform-specific imports are all seen.
    """

    goos: str = field(default_factory=_host_goos)
    goarch: str = field(default_factory=_host_goarch)
    build_tags: frozenset[str] = frozenset()
    cgo_enabled: bool = True
    use_all_files: bool = True
    compiler: str = "gc"
    gopath: tuple[str, ...] = field(default_factory=lambda: tuple(_default_gopath()))

    @classmethod
    def from_env(cls, **overrides) -> BuildContext:
        """Seed from GOOS, GOARCH, GOPATH and CGO_ENABLED, then apply overrides."""
        values: dict = {}
        if os.environ.get("GOOS"):
            values["goos"] = os.environ["GOOS"]
        if os.environ.get("GOARCH"):
            values["goarch"] = os.environ["GOARCH"]
        if "CGO_ENABLED" in os.environ:
            values["cgo_enabled"] = os.environ["CGO_ENABLED"] == "1"
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def release_tags(self) -> frozenset[str]:
        return frozenset(f"go1.{n}" for n in range(1, LATEST_GO_MINOR + 1))

    def gopath_src_roots(self) -> list[Path]:
        return [Path(os.path.abspath(p)) / "src" for p in self.gopath]
