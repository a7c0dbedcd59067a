"""Audit pipeline: discover -> register -> learn -> link -> freeze -> analyze -> report."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from layer_audit.analysis import DepthAnalyzer, GraphBuilder, ReachabilityAnalyzer
from layer_audit.config import read_learned_paths
from layer_audit.graph import Package, PackageRegistry
from layer_audit.models import AuditConfig, ReportEntry, Summary
from layer_audit.report import ReportAssembler
from layer_audit.scanner import BaseScanner, get_scanner

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


@dataclass
class AuditResult:
    """A fully built graph, its analyzers and the assembled report."""
    config: AuditConfig
    registry: PackageRegistry
    depth: DepthAnalyzer
    reachability: ReachabilityAnalyzer
    entries: list[ReportEntry] = field(default_factory=list)
    summary: Summary = field(default_factory=Summary)

    def describe(self, pkg: Package) -> dict:
        """Everything known about one package, reported or not."""
        return {
            "name": pkg.name,
            "identity": pkg.identity,
            "depth": self.depth.dependency_depth(pkg),
            "imported": self.reachability.is_imported(pkg),
            "internal": pkg.is_internal,
            "learned": pkg.is_learned,
            "predeclared": pkg.is_predeclared,
            "vendor": pkg.is_vendor,
            "dependencies": [d.name for d in pkg.dependencies],
            "dependents": [d.name for d in pkg.dependents],
        }

    def to_dict(self) -> dict:
        return {
            "root": self.config.root,
            "summary": self.summary.to_dict(),
            "entries": [e.to_dict() for e in self.entries],
        }


def build_graph(
    config: AuditConfig,
    scanner: BaseScanner | None = None,
    progress: ProgressCallback | None = None,
) -> tuple[PackageRegistry, GraphBuilder]:
    """Construction phase. Any error here aborts the run."""
    scanner = scanner or get_scanner(skip_dirs=config.skip_dirs)
    registry = PackageRegistry(config)
    builder = GraphBuilder(registry)

    # Stage 1: Discover
    if progress:
        progress("Discovering", 0, 1)
    registry.prime_pseudo_packages()
    for found in scanner.discover(config.root_path):
        registry.register(registry.identity_for_path(found.path))
    logger.info("discovered %d packages under %s", len(registry), config.root)
    if progress:
        progress("Discovering", 1, 1)

    # Stage 2: Learned
    learned = builder.mark_learned(read_learned_paths(config.learned_file))
    logger.info("%d packages already learned", len(learned))

    # Stage 3: Link
    packages = [pkg for pkg in registry.packages() if not registry.is_pseudo(pkg)]
    for i, pkg in enumerate(packages):
        if progress:
            progress("Scanning imports", i, len(packages))
        directory = config.root_path / pkg.relative_name
        builder.add_imports(pkg, scanner.scan_package(directory, directory.name))
    if progress:
        progress("Scanning imports", len(packages), len(packages))
    logger.info("recorded %d dependency edges", builder.edge_count)

    builder.freeze()
    return registry, builder


def run_audit(
    config: AuditConfig,
    scanner: BaseScanner | None = None,
    progress: ProgressCallback | None = None,
) -> AuditResult:
    """Run the full audit and return the assembled report."""
    registry, _ = build_graph(config, scanner=scanner, progress=progress)
    return analyze(config, registry)


def analyze(config: AuditConfig, registry: PackageRegistry) -> AuditResult:
    """Analysis phase over a finished graph."""
    depth = DepthAnalyzer()
    depth.check_acyclic(registry.packages())
    reachability = ReachabilityAnalyzer()

    assembler = ReportAssembler(depth, reachability)
    entries = assembler.assemble(registry.packages())

    summary = Summary(
        total_packages=len(registry),
        total_edges=sum(len(pkg.dependencies) for pkg in registry),
        learned=sum(1 for pkg in registry if pkg.is_learned),
        reported=len(entries),
        suppressed=assembler.suppressed,
        max_depth=max((e.depth for e in entries), default=-1),
    )
    return AuditResult(
        config=config,
        registry=registry,
        depth=depth,
        reachability=reachability,
        entries=entries,
        summary=summary,
    )
