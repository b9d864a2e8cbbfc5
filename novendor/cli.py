"""CLI entry point: novendor.

Usage:
    novendor                                  # check the working directory
    novendor ./cmd/server ./cmd/client        # check specific packages
    novendor --full-import-path --json .      # JSON report with vendor prefixes
    novendor --ignore-pkg ./vendor/github.com/org/tool .
"""

from __future__ import annotations

import sys

import click
import structlog

from novendor.calculator import run
from novendor.config import DEFAULT_PKG_REGEXPS, Config, load_config
from novendor.core.logging import setup_logging
from novendor.exceptions import NovendorError
from novendor.gobuild.context import BuildContext

log = structlog.get_logger("novendor.cli")


def _split_csv(values: tuple[str, ...]) -> list[str]:
    """Accept both repeated flags and comma separated values."""
    out: list[str] = []
    for value in values:
        out.extend(v for v in value.split(",") if v)
    return out


def _build_config(
    config_file: str | None,
    pkg_regexps: tuple[str, ...],
    full_import_path: bool,
    ignore_pkgs: tuple[str, ...],
) -> Config:
    """Merge the config file (if any) with command-line flags; flags win."""
    config = load_config(config_file) if config_file else Config(pkg_regexps=list(DEFAULT_PKG_REGEXPS))
    if pkg_regexps:
        config.pkg_regexps = list(pkg_regexps)
    if full_import_path:
        config.include_vendor_in_import_path = True
    config.ignore_pkgs = config.ignore_pkgs + _split_csv(ignore_pkgs)
    return config


@click.command(name="novendor")
@click.argument("packages", nargs=-1, type=click.Path())
@click.option(
    "--project-dir",
    type=click.Path(file_okay=False),
    default=".",
    show_default=True,
    help="Root directory of the project",
)
@click.option(
    "--pkg-regexp",
    "pkg_regexps",
    multiple=True,
    help="Regular expression used to group packages (repeatable; replaces the defaults)",
)
@click.option(
    "--full-import-path",
    is_flag=True,
    help="Print the full import path (including the vendor directory) for unused packages",
)
@click.option(
    "--ignore-pkg",
    "ignore_pkgs",
    multiple=True,
    help="Package directory to ignore: scanned for imports, never reported (repeatable or comma separated)",
)
@click.option("--config", "config_file", type=click.Path(exists=True, dir_okay=False), help="JSON config file")
@click.option("--goos", default=None, help="Target GOOS when build constraints are honored")
@click.option("--goarch", default=None, help="Target GOARCH when build constraints are honored")
@click.option("--tags", default="", help="Comma separated build tags when build constraints are honored")
@click.option(
    "--honor-build-constraints",
    is_flag=True,
    help="Only follow imports of files that build for the target platform",
)
@click.option("--json", "as_json", is_flag=True, help="Output a JSON object keyed by vendor directory")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging on stderr")
def main(
    packages: tuple[str, ...],
    project_dir: str,
    pkg_regexps: tuple[str, ...],
    full_import_path: bool,
    ignore_pkgs: tuple[str, ...],
    config_file: str | None,
    goos: str | None,
    goarch: str | None,
    tags: str,
    honor_build_constraints: bool,
    as_json: bool,
    verbose: bool,
) -> None:
    """Verify that all vendored packages are referenced in the project.

    Prints the vendored packages that no package in PACKAGES (default: the
    project directory) imports, directly or transitively.
    """
    setup_logging(verbose)

    try:
        config = _build_config(config_file, pkg_regexps, full_import_path, ignore_pkgs)
        param = config.to_param()
        context = BuildContext.from_env(
            goos=goos,
            goarch=goarch,
            build_tags=frozenset(_split_csv((tags,))),
            use_all_files=not honor_build_constraints,
        )
        run(
            project_dir,
            list(packages) or [project_dir],
            param,
            sys.stdout,
            context=context,
            output_format="json" if as_json else "text",
        )
    except NovendorError as e:
        log.debug("cli.failed", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
