"""Tests for import path normalization."""

from __future__ import annotations

import pytest

from novendor.config import DEFAULT_PKG_REGEXPS
from novendor.exceptions import PatternError
from novendor.normalize import (
    compile_patterns,
    split_vendor_prefix,
    strip_vendor_prefix,
    transform_import_path,
)

DEFAULTS = compile_patterns(DEFAULT_PKG_REGEXPS)


class TestCompilePatterns:
    def test_anchored_at_start(self):
        [pattern] = compile_patterns([r"github\.com/[^/]+"])
        assert pattern.pattern == r"^github\.com/[^/]+"
        assert pattern.match("github.com/org/repo")
        assert not pattern.match("example.com/github.com/org")

    def test_existing_anchor_kept(self):
        [pattern] = compile_patterns(["^gopkg"])
        assert pattern.pattern == "^gopkg"

    def test_invalid_expression(self):
        with pytest.raises(PatternError, match=r"failed to compile expression \^\[abc"):
            compile_patterns(["valid", "[abc"])


class TestVendorPrefix:
    def test_split_at_last_vendor_segment(self):
        assert split_vendor_prefix("a.io/p/vendor/b.io/q/vendor/c.io/r") == ("a.io/p/vendor/b.io/q/vendor/", "c.io/r")

    def test_no_vendor_segment(self):
        assert split_vendor_prefix("github.com/org/repo") == ("", "github.com/org/repo")

    def test_strip(self):
        assert strip_vendor_prefix("a.io/p/vendor/gopkg.in/yaml.v2") == "gopkg.in/yaml.v2"


class TestTransformImportPath:
    @pytest.mark.parametrize(
        "import_path, expected",
        [
            ("github.com/org/project/inner/pkg", "github.com/org/project"),
            ("golang.org/x/net/context", "golang.org/x/net"),
            ("gopkg.in/yaml.v2/internal", "gopkg.in/yaml.v2"),
            ("github.acme.corp/team/repo/pkg", "github.acme.corp/team/repo"),
            ("example.org/x/y", "example.org/x/y"),
            (
                "github.com/acme/project/vendor/github.com/org/lib/sub",
                "github.com/acme/project/vendor/github.com/org/lib",
            ),
            (
                "github.com/acme/project/vendor/gopkg.in/yaml.v2/inner",
                "github.com/acme/project/vendor/gopkg.in/yaml.v2",
            ),
        ],
    )
    def test_default_patterns(self, import_path, expected):
        assert transform_import_path(import_path, DEFAULTS) == expected

    def test_first_matching_pattern_wins(self):
        patterns = compile_patterns([r"github\.com/[^/]+", r"github\.com/[^/]+/[^/]+"])
        assert transform_import_path("github.com/org/repo/pkg", patterns) == "github.com/org"

    def test_no_patterns(self):
        assert transform_import_path("github.com/org/repo/pkg", []) == "github.com/org/repo/pkg"

    def test_idempotent(self):
        once = transform_import_path("a.io/p/vendor/github.com/org/repo/sub", DEFAULTS)
        assert transform_import_path(once, DEFAULTS) == once
