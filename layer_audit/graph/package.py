"""Package entity: one node of the import graph with its two edge lists."""

from __future__ import annotations

from layer_audit.models import PREDECLARED_NAMES


def sort_key(pkg: Package) -> tuple[str, str]:
    return (pkg.name, pkg.identity)


class Package:
    """A package in the analyzed tree.

    ``dependencies`` and ``dependents`` hold references to other registry
    packages. Both are free of duplicate references and sorted by display
    name after every mutation. Duplicates are detected by reference, never
    by name, so two distinct packages sharing a name are both kept.
    """

    def __init__(
        self,
        identity: str,
        relative_name: str,
        vendor_segment: str = "vendor",
        internal_segment: str = "internal",
        predeclared: frozenset[str] = PREDECLARED_NAMES,
    ):
        self._identity = identity
        self.relative_name = relative_name
        self.vendor_segment = vendor_segment
        self.is_internal = internal_segment in relative_name.split("/")
        self.is_learned = False
        self.dependencies: list[Package] = []
        self.dependents: list[Package] = []
        self._predeclared = predeclared

    @property
    def identity(self) -> str:
        return self._identity

    @property
    def is_vendor(self) -> bool:
        return bool(self.vendor_segment) and self.relative_name.split("/")[0] == self.vendor_segment

    @property
    def name(self) -> str:
        """Import path of the package; vendored packages drop the vendor segment."""
        if self.is_vendor:
            return "/".join(self.relative_name.split("/")[1:])
        return self.relative_name

    @property
    def is_predeclared(self) -> bool:
        return self.name in self._predeclared

    @property
    def is_sentinel(self) -> bool:
        """Learned and predeclared packages sit below every layer (depth -1)."""
        return self.is_learned or self.is_predeclared

    def mark_learned(self) -> None:
        self.is_learned = True

    def depends_on(self, dependency: Package) -> None:
        _insert_unique(self.dependencies, dependency)

    def add_dependent(self, dependent: Package) -> None:
        _insert_unique(self.dependents, dependent)

    def __repr__(self) -> str:
        return f"Package({self.name!r}, deps={len(self.dependencies)}, dependents={len(self.dependents)})"


def _insert_unique(packages: list[Package], pkg: Package) -> None:
    if any(existing is pkg for existing in packages):
        return
    packages.append(pkg)
    packages.sort(key=sort_key)
