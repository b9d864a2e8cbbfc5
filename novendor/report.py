"""Reporter — flatten, strip and sort the unused packages for output."""

from __future__ import annotations

import json
from typing import IO

import click

from novendor.normalize import strip_vendor_prefix


def _report_path(import_path: str, include_vendor_in_import_path: bool) -> str:
    return import_path if include_vendor_in_import_path else strip_vendor_prefix(import_path)


def format_unused(unused: dict[str, set[str]], include_vendor_in_import_path: bool) -> list[str]:
    """Flatten every vendor directory's residue into one sorted list.

    The same package left unused in two vendor trees appears twice.
    """
    out: list[str] = []
    for vendor_dir in sorted(unused):
        out.extend(sorted(unused[vendor_dir]))
    return sorted(_report_path(p, include_vendor_in_import_path) for p in out)


def write_text(lines: list[str], out: IO[str]) -> None:
    for line in lines:
        click.echo(line, file=out)


def write_json(unused: dict[str, set[str]], include_vendor_in_import_path: bool, out: IO[str]) -> None:
    """Write ``{vendor_dir: [paths...]}``, omitting vendor directories with nothing unused."""
    rows = {
        vendor_dir: sorted(_report_path(p, include_vendor_in_import_path) for p in pkgs)
        for vendor_dir, pkgs in sorted(unused.items())
        if pkgs
    }
    click.echo(json.dumps(rows, indent=2), file=out)
