"""Exception hierarchy for layer-audit.

Everything raised on purpose derives from LayerAuditError so the CLI can
turn it into a single diagnostic line.
"""


class LayerAuditError(Exception):
    """Base exception for all layer-audit errors."""


class ConfigError(LayerAuditError):
    """The configuration file is missing, malformed or points nowhere."""


class DuplicatePackageError(LayerAuditError):
    """A package identity was registered twice."""

    def __init__(self, identity: str):
        self.identity = identity
        super().__init__(f"Package already loaded: {identity}")


class GraphFrozenError(LayerAuditError):
    """An edge was added after graph construction finished."""


class DependencyCycleError(LayerAuditError):
    """The dependency graph contains a cycle."""

    def __init__(self, cycle: list[str]):
        self.cycle = cycle
        super().__init__("Dependency cycle detected: " + " -> ".join(cycle))


class SourceParseError(LayerAuditError):
    """A source file has no package clause or a malformed import block."""

    def __init__(self, path, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class PackageScanError(LayerAuditError):
    """A registered package directory could not be read."""
