"""Package registry: the single owner of package identities."""

from __future__ import annotations

import logging
import posixpath
import re
from pathlib import Path
from typing import Iterator

from layer_audit.errors import DuplicatePackageError
from layer_audit.graph.package import Package, sort_key
from layer_audit.models import AuditConfig

logger = logging.getLogger(__name__)

PSEUDO_PACKAGES = ("C",)


class PackageRegistry:
    """Map canonical package identities (full paths) to Package objects.

    One registry per audit run. Every other component reaches packages
    through the references handed out here.
    """

    def __init__(self, config: AuditConfig | None = None):
        self.config = config or AuditConfig()
        self.root = self.config.root
        self._packages: dict[str, Package] = {}
        self._vendor_import = re.compile(self.config.vendor_import_pattern)
        self._pseudo: set[str] = set()

    def register(self, identity: str) -> Package:
        """Create the package for ``identity``; fails if it already exists."""
        if identity in self._packages:
            raise DuplicatePackageError(identity)
        pkg = Package(
            identity,
            self.relative_name(identity),
            vendor_segment=self.config.vendor_segment,
            internal_segment=self.config.internal_segment,
            predeclared=self.config.predeclared,
        )
        self._packages[identity] = pkg
        logger.debug("registered %s", pkg.name or identity)
        return pkg

    def lookup(self, identity: str) -> Package | None:
        return self._packages.get(identity)

    def relative_name(self, identity: str) -> str:
        if identity == self.root:
            return ""
        prefix = self.root.rstrip("/") + "/"
        if identity.startswith(prefix):
            return identity[len(prefix):]
        return identity

    def identity_for_path(self, path: Path) -> str:
        """Canonical identity of a package directory found on disk."""
        return posixpath.normpath(Path(path).absolute().as_posix())

    def identity_for_import(self, import_path: str) -> str:
        """Canonical identity an import path would have inside the tree."""
        if self._vendor_import.search(import_path):
            joined = posixpath.join(self.root, self.config.vendor_segment, import_path)
        else:
            joined = posixpath.join(self.root, import_path)
        return posixpath.normpath(joined)

    def resolve_import(self, import_path: str) -> Package | None:
        return self.lookup(self.identity_for_import(import_path))

    def prime_pseudo_packages(self) -> list[Package]:
        """Register pseudo-packages that have no directory of their own."""
        primed = []
        for name in PSEUDO_PACKAGES:
            pkg = self.register(posixpath.join(self.root, name))
            self._pseudo.add(pkg.identity)
            primed.append(pkg)
        return primed

    def is_pseudo(self, pkg: Package) -> bool:
        return pkg.identity in self._pseudo

    def find_by_name(self, name: str) -> list[Package]:
        return [pkg for pkg in self.packages() if pkg.name == name]

    def packages(self) -> list[Package]:
        """All packages, sorted by display name."""
        return sorted(self._packages.values(), key=sort_key)

    def __iter__(self) -> Iterator[Package]:
        return iter(self._packages.values())

    def __len__(self) -> int:
        return len(self._packages)

    def __contains__(self, identity: str) -> bool:
        return identity in self._packages
