"""Tests for configuration loading and validation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from novendor.config import DEFAULT_PKG_REGEXPS, Config, load_config
from novendor.exceptions import ConfigError, PatternError


def _write(tmp_path: Path, data) -> Path:
    path = tmp_path / "novendor.json"
    path.write_text(json.dumps(data))
    return path


class TestLoadConfig:
    def test_all_keys(self, tmp_path: Path):
        path = _write(
            tmp_path,
            {
                "pkgRegexps": [r"example\.org/[^/]+"],
                "includeVendorInImportPath": True,
                "ignorePkgs": ["./vendor/github.com/org/tool"],
            },
        )
        config = load_config(path)
        assert config.pkg_regexps == [r"example\.org/[^/]+"]
        assert config.include_vendor_in_import_path is True
        assert config.ignore_pkgs == ["./vendor/github.com/org/tool"]

    def test_missing_keys_use_empty_defaults(self, tmp_path: Path):
        config = load_config(_write(tmp_path, {}))
        assert config == Config()

    def test_unknown_key(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="unknown key 'pkgRegexp'"):
            load_config(_write(tmp_path, {"pkgRegexp": []}))

    def test_wrong_type(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="must be a bool"):
            load_config(_write(tmp_path, {"includeVendorInImportPath": "yes"}))

    def test_list_of_non_strings(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="list of strings"):
            load_config(_write(tmp_path, {"ignorePkgs": [1, 2]}))

    def test_not_an_object(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="JSON object"):
            load_config(_write(tmp_path, ["pkgRegexps"]))

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "novendor.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="invalid JSON"):
            load_config(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="failed to read config file"):
            load_config(tmp_path / "absent.json")


class TestToParam:
    def test_compiles_patterns(self):
        param = Config(pkg_regexps=list(DEFAULT_PKG_REGEXPS), ignore_pkgs=["a"]).to_param()
        assert len(param.pkg_regexps) == len(DEFAULT_PKG_REGEXPS)
        assert all(p.pattern.startswith("^") for p in param.pkg_regexps)
        assert param.ignore_pkgs == ["a"]
        assert param.include_vendor_in_import_path is False

    def test_bad_pattern(self):
        with pytest.raises(PatternError):
            Config(pkg_regexps=["(unclosed"]).to_param()
