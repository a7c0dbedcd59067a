"""Report assembler: group packages by depth and annotate their dependencies."""

from __future__ import annotations

import logging
from typing import Iterable

from layer_audit.analysis import DepthAnalyzer, ReachabilityAnalyzer
from layer_audit.graph import Package, sort_key
from layer_audit.models import DependencyRef, ReportEntry

logger = logging.getLogger(__name__)


class ReportAssembler:
    """Build the grouped, ordered report from an analyzed graph."""

    def __init__(self, depth: DepthAnalyzer, reachability: ReachabilityAnalyzer):
        self.depth = depth
        self.reachability = reachability
        self.suppressed = 0

    def group_by_depth(self, packages: Iterable[Package]) -> dict[int, list[Package]]:
        """Bucket packages by depth; each bucket is sorted by display name."""
        buckets: dict[int, list[Package]] = {}
        for pkg in packages:
            buckets.setdefault(self.depth.dependency_depth(pkg), []).append(pkg)
        for bucket in buckets.values():
            bucket.sort(key=sort_key)
        return buckets

    def entry_for(self, pkg: Package) -> ReportEntry | None:
        """The report entry for ``pkg``, or None when it is suppressed."""
        imported = self.reachability.is_imported(pkg)
        if pkg.is_internal and not imported:
            return None
        return ReportEntry(
            name=pkg.name,
            depth=self.depth.dependency_depth(pkg),
            imported=imported,
            dependencies=[
                DependencyRef(name=dep.name, unlearned=not dep.is_sentinel)
                for dep in pkg.dependencies
            ],
        )

    def assemble(self, packages: Iterable[Package]) -> list[ReportEntry]:
        """Entries for every reportable package, ordered by depth then name.

        Depth -1 (learned and predeclared) is never reported. Only populated
        depths are visited, in ascending order.
        """
        self.suppressed = 0
        buckets = self.group_by_depth(packages)
        entries: list[ReportEntry] = []
        for depth in sorted(d for d in buckets if d >= 0):
            for pkg in buckets[depth]:
                entry = self.entry_for(pkg)
                if entry is None:
                    logger.debug("suppressed unimported internal package %s", pkg.name)
                    self.suppressed += 1
                    continue
                entries.append(entry)
        return entries


def report_rows(entries: Iterable[ReportEntry]) -> list[list[str]]:
    rows: list[list[str]] = []
    for entry in entries:
        rows.extend(entry.rows())
    return rows
