"""Tests for the multi-package directory splitter."""

from __future__ import annotations

from unittest.mock import MagicMock

from novendor.exceptions import MultiplePackageError, PackageNotFoundError
from novendor.models.package import GoPackage, ResolveResult
from novendor.splitter import resolve_all

PROJECT_IMPORT = "github.com/acme/project"


class TestResolveAll:
    def test_standard_library_is_skipped(self):
        resolver = MagicMock()
        assert resolve_all(resolver, "net/http", "/src", set()) == []
        resolver.resolve.assert_not_called()

    def test_single_package(self, resolver, project, write_tree):
        write_tree(project, {"a.go": 'package a\n\nimport "github.com/org/x"\n'})
        pkgs = resolve_all(resolver, ".", str(project), set())
        assert [p.import_path for p in pkgs] == [PROJECT_IMPORT]
        assert pkgs[0].imports == ["github.com/org/x"]

    def test_visited_package_is_not_returned(self, resolver, project, write_tree):
        write_tree(project, {"a.go": "package a"})
        assert resolve_all(resolver, ".", str(project), {PROJECT_IMPORT}) == []

    def test_unresolved_import_yields_nothing(self, resolver, project):
        assert resolve_all(resolver, "github.com/nobody/nothing", str(project), set()) == []

    def test_directory_without_go_files_is_returned_unnamed(self, resolver, project):
        pkgs = resolve_all(resolver, ".", str(project), set())
        assert len(pkgs) == 1
        assert pkgs[0].name == ""

    def test_two_packages_in_one_directory(self, resolver, project, write_tree):
        write_tree(
            project,
            {
                "a_lib.go": 'package lib\n\nimport "github.com/org/x"\n',
                "b_gen.go": '//go:build ignore\n\npackage main\n\nimport "github.com/org/y"\n',
            },
        )
        pkgs = resolve_all(resolver, ".", str(project), set())
        assert [p.name for p in pkgs] == ["lib", "main"]
        assert pkgs[0].imports == ["github.com/org/x"]
        assert pkgs[1].imports == ["github.com/org/y"]
        assert {p.import_path for p in pkgs} == {PROJECT_IMPORT}

    def test_test_files_travel_with_their_package(self, resolver, project, write_tree):
        write_tree(
            project,
            {
                "a_lib.go": "package lib",
                "a_lib_test.go": 'package lib\n\nimport "github.com/org/mock"\n',
                "b_gen.go": "package main",
            },
        )
        pkgs = resolve_all(resolver, ".", str(project), set())
        assert [p.name for p in pkgs] == ["lib", "main"]
        assert pkgs[0].test_imports == ["github.com/org/mock"]

    def test_cgo_only_remainder_stops_the_loop(self, resolver, project, write_tree):
        write_tree(
            project,
            {
                "a.go": "package lib",
                "c.go": 'package lib\n\nimport "C"\n',
                "m.go": "package main",
            },
        )
        pkgs = resolve_all(resolver, ".", str(project), set())
        assert [p.name for p in pkgs] == ["lib"]

    def test_hidden_files_accumulate_between_passes(self):
        conflict = GoPackage(
            import_path="example.org/p",
            dir="/p",
            name="lib",
            go_files=["a.go"],
            invalid_go_files=["b.go"],
            multiple_packages=True,
        )
        lib = GoPackage(import_path="example.org/p", dir="/p", name="lib", go_files=["a.go"])
        main = GoPackage(import_path="example.org/p", dir="/p", name="main", go_files=["b.go"])

        resolver = MagicMock()
        resolver.resolve.side_effect = [
            ResolveResult(conflict, MultiplePackageError("/p", ["lib", "main"], ["a.go", "b.go"])),
            ResolveResult(lib),
            ResolveResult(main),
        ]

        pkgs = resolve_all(resolver, "example.org/p", "/src", set())

        assert pkgs == [lib, main]
        ignored = [c.args[2] for c in resolver.resolve.call_args_list]
        assert ignored == [frozenset(), frozenset({"b.go"}), frozenset({"a.go"})]

    def test_not_found_after_split_ends_the_loop(self):
        resolver = MagicMock()
        resolver.resolve.return_value = ResolveResult(None, PackageNotFoundError("example.org/p", []))
        assert resolve_all(resolver, "example.org/p", "/src", set()) == []
        assert resolver.resolve.call_count == 1
