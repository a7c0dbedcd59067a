"""Abstract base scanner: package discovery and per-directory import scanning."""

from __future__ import annotations

import abc
import fnmatch
import logging
import os
from pathlib import Path
from typing import Iterator

from layer_audit.errors import PackageScanError, SourceParseError
from layer_audit.models import DiscoveredPackage, SourceFile

logger = logging.getLogger(__name__)


class BaseScanner(abc.ABC):
    """Base class for language-specific source scanners.

    A directory is a package when one of its non-test source files declares
    a package named after the directory. Only the first such file is needed
    to establish that; import scanning then reads every non-test file in the
    directory whose package clause matches.
    """

    extensions: tuple[str, ...]
    test_patterns: tuple[str, ...] = ()

    def __init__(self, skip_dirs: list[str] | None = None):
        self.skip_dirs = skip_dirs if skip_dirs is not None else ["cmd", "testdata"]

    @abc.abstractmethod
    def read_package_clause(self, file_path: Path) -> str:
        """Return the declared package name; raises SourceParseError."""

    @abc.abstractmethod
    def read_imports(self, file_path: Path) -> SourceFile:
        """Return the package clause and raw import paths; raises SourceParseError."""

    def is_test_file(self, file_path: Path) -> bool:
        return any(fnmatch.fnmatch(file_path.name, p) for p in self.test_patterns)

    def is_source_file(self, file_path: Path) -> bool:
        return file_path.suffix in self.extensions and not self.is_test_file(file_path)

    def discover(self, root: Path) -> Iterator[DiscoveredPackage]:
        """Walk ``root`` and yield every package directory, in sorted order."""
        def _raise(err: OSError) -> None:
            raise PackageScanError(f"Cannot read {err.filename}: {err.strerror}") from err

        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
            dirnames[:] = sorted(d for d in dirnames if not self._should_skip(d))
            directory = Path(dirpath)
            if directory == root:
                continue
            found = self._detect_package(directory, sorted(filenames))
            if found is not None:
                yield found

    def scan_package(self, directory: Path, expected_name: str) -> list[str]:
        """Raw imports of every non-test source file that belongs to the package."""
        try:
            entries = sorted(os.scandir(directory), key=lambda e: e.name)
        except OSError as e:
            raise PackageScanError(f"Cannot read package directory {directory}: {e.strerror}") from e

        imports: list[str] = []
        for entry in entries:
            file_path = Path(entry.path)
            if not entry.is_file() or not self.is_source_file(file_path):
                continue
            try:
                source = self.read_imports(file_path)
            except SourceParseError as e:
                logger.debug("skipping %s", e)
                continue
            if source.package != expected_name:
                continue
            imports.extend(source.imports)
        return imports

    def _detect_package(self, directory: Path, filenames: list[str]) -> DiscoveredPackage | None:
        for filename in filenames:
            file_path = directory / filename
            if not self.is_source_file(file_path):
                continue
            try:
                package = self.read_package_clause(file_path)
            except SourceParseError as e:
                logger.debug("skipping %s", e)
                continue
            if package == directory.name:
                return DiscoveredPackage(path=directory, name=package)
        return None

    def _should_skip(self, dirname: str) -> bool:
        return any(fnmatch.fnmatch(dirname, pattern) for pattern in self.skip_dirs)

    def _read_source(self, file_path: Path) -> bytes:
        try:
            return file_path.read_bytes()
        except OSError as e:
            raise SourceParseError(file_path, f"cannot read file: {e.strerror}") from e
