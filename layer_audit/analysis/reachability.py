"""Reachability: is a package imported from outside the internal boundary?"""

from __future__ import annotations

from collections import deque

from layer_audit.graph import Package


class ReachabilityAnalyzer:
    """Answer ``is_imported`` by walking ``dependents`` edges.

    A package is imported when some chain of dependents reaches a
    non-internal package. Direct dependents are checked first; the search
    then goes breadth first with a visited set, so cycles cannot loop.
    """

    def __init__(self):
        self._imported: dict[str, bool] = {}

    def is_imported(self, pkg: Package) -> bool:
        cached = self._imported.get(pkg.identity)
        if cached is not None:
            return cached
        result = self._search(pkg)
        self._imported[pkg.identity] = result
        return result

    def _search(self, pkg: Package) -> bool:
        if any(not dependent.is_internal for dependent in pkg.dependents):
            return True

        visited: set[str] = {pkg.identity}
        queue = deque(pkg.dependents)
        while queue:
            current = queue.popleft()
            if current.identity in visited:
                continue
            visited.add(current.identity)
            if not current.is_internal:
                return True
            known = self._imported.get(current.identity)
            if known is not None:
                if known:
                    return True
                continue
            queue.extend(current.dependents)
        return False

    def reset(self) -> None:
        self._imported.clear()
