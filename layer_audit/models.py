"""Data models for the layer-audit pipeline."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from pathlib import Path

PREDECLARED_NAMES = frozenset({"builtin", "C", "unsafe"})
UNLEARNED_MARKER = "*"


@dataclass
class AuditConfig:
    """Configuration for one audit run."""
    root_path: Path = field(default_factory=lambda: Path("."))
    vendor_segment: str = "vendor"
    learned_file: Path | None = None
    internal_segment: str = "internal"
    vendor_import_pattern: str = r"golang_org/x/\w*"
    predeclared: frozenset[str] = PREDECLARED_NAMES
    skip_dirs: list[str] = field(default_factory=lambda: ["cmd", "testdata"])

    @property
    def root(self) -> str:
        """Absolute, normalized posix root: the prefix of every identity."""
        return posixpath.normpath(self.root_path.absolute().as_posix())


@dataclass
class DiscoveredPackage:
    """Result from the discovery stage: a directory that is a real package."""
    path: Path
    name: str


@dataclass
class DependencyRef:
    """A dependency as listed under a report entry."""
    name: str
    unlearned: bool = False

    @property
    def label(self) -> str:
        """Display name, with the marker appended when unlearned."""
        if self.unlearned:
            return f"{self.name} {UNLEARNED_MARKER}"
        return self.name


@dataclass
class ReportEntry:
    """One reported package with its annotated dependencies."""
    name: str
    depth: int
    imported: bool
    dependencies: list[DependencyRef] = field(default_factory=list)

    @property
    def import_flag(self) -> str:
        """Text of the imported column."""
        return "imported" if self.imported else "unimported"

    def rows(self) -> list[list[str]]:
        """Flatten into report rows: header + first dependency, then continuations."""
        header = [self.name, str(self.depth), self.import_flag]
        if not self.dependencies:
            return [header]
        rows = [header + [self.dependencies[0].label]]
        for dep in self.dependencies[1:]:
            rows.append(["", "", "", dep.label])
        return rows

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "depth": self.depth,
            "imported": self.imported,
            "dependencies": [
                {"name": d.name, "unlearned": d.unlearned} for d in self.dependencies
            ],
        }


@dataclass
class Summary:
    """Counts describing one audit run."""
    total_packages: int = 0
    total_edges: int = 0
    learned: int = 0
    reported: int = 0
    suppressed: int = 0
    max_depth: int = -1

    def to_dict(self) -> dict:
        return {
            "total_packages": self.total_packages,
            "total_edges": self.total_edges,
            "learned": self.learned,
            "reported": self.reported,
            "suppressed": self.suppressed,
            "max_depth": self.max_depth,
        }


@dataclass
class SourceFile:
    """Package clause and raw import paths of one source file."""
    path: Path
    package: str
    imports: list[str] = field(default_factory=list)
