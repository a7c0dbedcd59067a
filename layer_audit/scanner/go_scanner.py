"""Go scanner: package clause and import declarations from the tree-sitter Go grammar."""

from __future__ import annotations

from pathlib import Path

from tree_sitter_language_pack import get_parser

from layer_audit.errors import SourceParseError
from layer_audit.models import SourceFile
from layer_audit.scanner.base import BaseScanner

_GRAMMAR = "go"


class GoScanner(BaseScanner):
    """Reads the header of Go files: the package clause and the import
    declarations that directly follow it. Anything after the first other
    declaration is never inspected.
    """

    extensions = (".go",)
    test_patterns = ("*_test.go",)

    def __init__(self, skip_dirs: list[str] | None = None):
        super().__init__(skip_dirs=skip_dirs)
        self._parser = None

    def read_package_clause(self, file_path: Path) -> str:
        root = self._parse(file_path)
        _, name = self._package_clause(file_path, root)
        return name

    def read_imports(self, file_path: Path) -> SourceFile:
        root = self._parse(file_path)
        index, name = self._package_clause(file_path, root)
        return SourceFile(
            path=file_path,
            package=name,
            imports=self._parse_imports(file_path, root.named_children[index + 1:]),
        )

    def _parse(self, file_path: Path):
        if self._parser is None:
            self._parser = get_parser(_GRAMMAR)
        return self._parser.parse(self._read_source(file_path)).root_node

    def _package_clause(self, file_path: Path, root) -> tuple[int, str]:
        """Index among the root's named children and declared name."""
        for index, node in enumerate(root.named_children):
            if node.type == "comment":
                continue
            if node.type != "package_clause" or node.has_error:
                break
            for child in node.named_children:
                if child.type == "package_identifier":
                    return index, _text(child)
            break
        raise SourceParseError(file_path, "expected package clause")

    def _parse_imports(self, file_path: Path, nodes) -> list[str]:
        imports: list[str] = []
        for node in nodes:
            if node.type == "comment":
                continue
            if node.type == "ERROR" or (node.type == "import_declaration" and node.has_error):
                raise SourceParseError(file_path, "malformed import declaration")
            if node.type != "import_declaration":
                break
            for spec in _import_specs(node):
                path = spec.child_by_field_name("path")
                if path is None:
                    raise SourceParseError(file_path, "import without a path")
                imports.append(_unquote(_text(path)))
        return imports


def _import_specs(declaration):
    for child in declaration.named_children:
        if child.type == "import_spec":
            yield child
        elif child.type == "import_spec_list":
            yield from (c for c in child.named_children if c.type == "import_spec")


def _text(node) -> str:
    return node.text.decode("utf-8", errors="replace")


def _unquote(literal: str) -> str:
    return literal[1:-1]
