"""Tests for Go source scanning and package discovery."""

from pathlib import Path

import pytest

from layer_audit.errors import PackageScanError, SourceParseError
from layer_audit.scanner import GoScanner, get_scanner

FIXTURES = Path(__file__).parent / "fixtures"
GOROOT = FIXTURES / "goroot"


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


# ── Parsing ───────────────────────────────────────────────────

class TestGoParsing:
    def test_single_import(self, tmp_path):
        path = _write(tmp_path, "a.go", 'package a\n\nimport "fmt"\n\nfunc main() {}\n')
        source = GoScanner().read_imports(path)
        assert source.package == "a"
        assert source.imports == ["fmt"]

    def test_grouped_and_aliased_imports(self, tmp_path):
        path = _write(tmp_path, "a.go", (
            "package a\n"
            "import (\n"
            '\t"errors"\n'
            '\tstr "strings"\n'
            '\t. "math"\n'
            '\t_ "unsafe"\n'
            "\t`io`\n"
            ")\n"
            'import "os"; import "sort"\n'
            "var x = 1\n"
            'import "ignored"\n'
        ))
        assert GoScanner().read_imports(path).imports == [
            "errors", "strings", "math", "unsafe", "io", "os", "sort",
        ]

    def test_comments_are_ignored(self, tmp_path):
        path = _write(tmp_path, "a.go", (
            "// Copyright header mentioning package b\n"
            "//go:build linux\n"
            "\n"
            "/* package c */\n"
            "package a // trailing\n"
            "\n"
            "/*\n"
            "#include <stdio.h>\n"
            "*/\n"
            'import "C"\n'
            "import (\n"
            '\t"io" // "not/an/import"\n'
            '\t// "commented/out"\n'
            ")\n"
        ))
        source = GoScanner().read_imports(path)
        assert source.package == "a"
        assert source.imports == ["C", "io"]

    def test_no_imports(self, tmp_path):
        path = _write(tmp_path, "a.go", "package a\n\nfunc F() {}\n")
        assert GoScanner().read_imports(path).imports == []

    def test_missing_package_clause(self, tmp_path):
        path = _write(tmp_path, "a.go", "this isn't Go\n")
        with pytest.raises(SourceParseError):
            GoScanner().read_package_clause(path)

    def test_malformed_import_block(self, tmp_path):
        path = _write(tmp_path, "a.go", "package a\nimport (\n\tfmt\n)\n")
        with pytest.raises(SourceParseError):
            GoScanner().read_imports(path)

    def test_package_clause_only_needs_header(self, tmp_path):
        path = _write(tmp_path, "a.go", "package a\nimport (\n\tfmt\n)\n")
        assert GoScanner().read_package_clause(path) == "a"

    def test_comment_markers_inside_strings(self, tmp_path):
        path = _write(tmp_path, "a.go", 'package a\nimport "x//y" /* "gone" */\nimport `/*raw*/`\n')
        assert GoScanner().read_imports(path).imports == ["x//y", "/*raw*/"]

    def test_missing_import_path(self, tmp_path):
        path = _write(tmp_path, "a.go", "package a\nimport str\n\nfunc F() {}\n")
        with pytest.raises(SourceParseError):
            GoScanner().read_imports(path)

    def test_test_files(self):
        scanner = GoScanner()
        assert scanner.is_test_file(Path("errors_test.go"))
        assert not scanner.is_source_file(Path("errors_test.go"))
        assert scanner.is_source_file(Path("errors.go"))
        assert not scanner.is_source_file(Path("notes.txt"))


# ── Discovery ─────────────────────────────────────────────────

class TestDiscovery:
    def test_discovers_fixture_packages(self):
        found = list(GoScanner().discover(GOROOT))
        rel = sorted(p.path.relative_to(GOROOT).as_posix() for p in found)
        assert rel == [
            "builtin",
            "errors",
            "internal/chain",
            "internal/reflectlite",
            "internal/unused",
            "io",
            "net",
            "sync",
            "unsafe",
            "vendor/golang_org/x/net/route",
        ]

    def test_skip_dirs(self):
        found = list(GoScanner(skip_dirs=["vendor", "internal"]).discover(GOROOT))
        rel = {p.path.relative_to(GOROOT).as_posix() for p in found}
        assert "cmd/vet" in rel
        assert "errors/testdata" in rel
        assert not any(r.startswith(("vendor", "internal")) for r in rel)

    def test_first_matching_file_establishes_package(self, tmp_path):
        _write(tmp_path, "root/pkg/a.go", "package main\n")
        _write(tmp_path, "root/pkg/b.go", "broken")
        _write(tmp_path, "root/pkg/c.go", "package pkg\n")
        _write(tmp_path, "root/pkg/d.go", "package other\n")
        found = list(GoScanner().discover(tmp_path / "root"))
        assert [(p.path.name, p.name) for p in found] == [("pkg", "pkg")]

    def test_test_file_does_not_establish_package(self, tmp_path):
        _write(tmp_path, "root/pkg/pkg_test.go", "package pkg\n")
        assert list(GoScanner().discover(tmp_path / "root")) == []

    def test_root_files_are_ignored(self, tmp_path):
        _write(tmp_path, "root/root.go", "package root\n")
        assert list(GoScanner().discover(tmp_path / "root")) == []

    def test_unreadable_root(self, tmp_path):
        with pytest.raises(PackageScanError):
            list(GoScanner().discover(tmp_path / "missing"))


# ── Import scanning ───────────────────────────────────────────

class TestScanPackage:
    def test_all_matching_files_contribute(self):
        imports = GoScanner().scan_package(GOROOT / "net", "net")
        assert sorted(imports) == sorted(["C", "unsafe", "errors", "io", "golang_org/x/net/route"])

    def test_test_files_and_foreign_packages_are_excluded(self):
        imports = GoScanner().scan_package(GOROOT / "errors", "errors")
        assert imports == ["internal/reflectlite"]

    def test_unparseable_file_is_skipped(self, tmp_path):
        _write(tmp_path, "pkg/a.go", "package pkg\nimport (\n\tbad\n)\n")
        _write(tmp_path, "pkg/b.go", 'package pkg\nimport "io"\n')
        assert GoScanner().scan_package(tmp_path / "pkg", "pkg") == ["io"]

    def test_missing_directory_is_fatal(self, tmp_path):
        with pytest.raises(PackageScanError):
            GoScanner().scan_package(tmp_path / "gone", "gone")


def test_get_scanner():
    assert isinstance(get_scanner("go"), GoScanner)
    with pytest.raises(ValueError):
        get_scanner("cobol")
