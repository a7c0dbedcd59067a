"""layer-audit: dependency depth and import reachability for a package tree."""

__version__ = "0.1.0"
