"""Import path normalization — group sub-packages under a project identity."""

from __future__ import annotations

import re

from novendor.exceptions import PatternError

VENDOR_SEGMENT = "/vendor/"


def compile_patterns(exprs: list[str]) -> list[re.Pattern[str]]:
    """Compile grouping expressions, anchoring each at the start of the string.

    Raises PatternError naming the first expression that does not compile.
    """
    patterns: list[re.Pattern[str]] = []
    for expr in exprs:
        if not expr.startswith("^"):
            expr = "^" + expr
        try:
            patterns.append(re.compile(expr))
        except re.error as e:
            raise PatternError(expr, str(e)) from e
    return patterns


def split_vendor_prefix(import_path: str) -> tuple[str, str]:
    """Split at the last ``/vendor/`` into (prefix including the segment, remainder)."""
    idx = import_path.rfind(VENDOR_SEGMENT)
    if idx < 0:
        return "", import_path
    cut = idx + len(VENDOR_SEGMENT)
    return import_path[:cut], import_path[cut:]


def strip_vendor_prefix(import_path: str) -> str:
    return split_vendor_prefix(import_path)[1]


def transform_import_path(import_path: str, patterns: list[re.Pattern[str]]) -> str:
    """Map *import_path* to its normalized "project" identity.

    The part after the last ``/vendor/`` is replaced by the match of the first
    pattern that matches it; the vendor prefix is kept so that copies in
    different vendor trees stay distinct.

    Examples:
        "github.com/org/project/inner/pkg", ^github.com/[^/]+/[^/]+
            -> "github.com/org/project"
        "github.com/org/project/vendor/gopkg.in/yaml.v2/inner", ^gopkg.in/[^/]+
            -> "github.com/org/project/vendor/gopkg.in/yaml.v2"
    """
    prefix, remainder = split_vendor_prefix(import_path)
    for pattern in patterns:
        m = pattern.match(remainder)
        if m:
            remainder = m.group(0)
            break
    return prefix + remainder
