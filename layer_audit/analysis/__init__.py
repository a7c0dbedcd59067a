"""Graph construction and the two read-only analyzers."""

from layer_audit.analysis.builder import GraphBuilder
from layer_audit.analysis.depth import DepthAnalyzer
from layer_audit.analysis.reachability import ReachabilityAnalyzer

__all__ = ["GraphBuilder", "DepthAnalyzer", "ReachabilityAnalyzer"]
