"""Package entity and registry."""

from layer_audit.graph.package import Package, sort_key
from layer_audit.graph.registry import PackageRegistry

__all__ = ["Package", "PackageRegistry", "sort_key"]
