"""Dependency depth: the layer a package sits in.

    -1   learned or predeclared packages
     0   packages without dependencies
     n   1 + the deepest dependency otherwise
"""

from __future__ import annotations

from layer_audit.errors import DependencyCycleError
from layer_audit.graph import Package


class DepthAnalyzer:
    """Compute dependency depths with a memo table keyed by identity.

    The graph must be acyclic; a cycle raises DependencyCycleError instead
    of recursing forever.
    """

    def __init__(self):
        self._depths: dict[str, int] = {}
        self._visiting: list[Package] = []

    def dependency_depth(self, pkg: Package) -> int:
        if pkg.is_sentinel:
            return -1

        cached = self._depths.get(pkg.identity)
        if cached is not None:
            return cached

        for i, visiting in enumerate(self._visiting):
            if visiting is pkg:
                cycle = [p.name for p in self._visiting[i:]] + [pkg.name]
                self._visiting.clear()
                raise DependencyCycleError(cycle)

        self._visiting.append(pkg)
        depth = 0
        for dependency in pkg.dependencies:
            depth = max(depth, self.dependency_depth(dependency) + 1)
        self._visiting.pop()

        self._depths[pkg.identity] = depth
        return depth

    def check_acyclic(self, packages) -> None:
        """Visit every package once; raises on the first cycle found.

        Learned packages stop the depth recursion, so their dependencies are
        walked here as well to cover the whole graph.
        """
        for pkg in packages:
            if pkg.is_sentinel:
                for dependency in pkg.dependencies:
                    self._walk_from(pkg, dependency)
            else:
                self.dependency_depth(pkg)

    def _walk_from(self, origin: Package, pkg: Package) -> None:
        stack: list[tuple[Package, list[Package]]] = [(pkg, [origin, pkg])]
        seen: set[str] = set()
        while stack:
            current, path = stack.pop()
            if current is origin:
                raise DependencyCycleError([p.name for p in path])
            if current.identity in seen:
                continue
            seen.add(current.identity)
            for dependency in current.dependencies:
                stack.append((dependency, path + [dependency]))

    def reset(self) -> None:
        self._depths.clear()
        self._visiting.clear()
