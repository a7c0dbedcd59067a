"""Graph builder: turn raw import strings into dependency/dependent edges."""

from __future__ import annotations

import logging
from typing import Iterable

from layer_audit.errors import GraphFrozenError
from layer_audit.graph import Package, PackageRegistry

logger = logging.getLogger(__name__)


class GraphBuilder:
    """Record edges between registry packages.

    Construction happens in one phase; ``freeze()`` ends it, after which the
    graph is only read.
    """

    def __init__(self, registry: PackageRegistry):
        self.registry = registry
        self.edge_count = 0
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def resolve_import(self, import_path: str) -> Package | None:
        pkg = self.registry.resolve_import(import_path)
        if pkg is None:
            logger.debug("import %r is outside the analyzed tree", import_path)
        return pkg

    def add_dependency(self, owner: Package, imported: Package | None) -> bool:
        """Record ``owner -> imported``. Returns False when nothing was added."""
        if self._frozen:
            raise GraphFrozenError(f"Cannot add {owner.name} -> {imported.name if imported else None}: graph is frozen")
        if imported is None:
            return False
        before = len(owner.dependencies)
        owner.depends_on(imported)
        imported.add_dependent(owner)
        if len(owner.dependencies) == before:
            return False
        self.edge_count += 1
        return True

    def add_imports(self, owner: Package, import_paths: Iterable[str]) -> int:
        """Resolve and record every import of ``owner``; returns new edge count."""
        added = 0
        for import_path in import_paths:
            if self.add_dependency(owner, self.resolve_import(import_path)):
                added += 1
        return added

    def mark_learned(self, import_paths: Iterable[str]) -> list[Package]:
        learned: list[Package] = []
        for import_path in import_paths:
            pkg = self.resolve_import(import_path)
            if pkg is None:
                continue
            pkg.mark_learned()
            learned.append(pkg)
        return learned
