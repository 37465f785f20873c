"""
Infrastructure cascade engine.

Components:
    DependencyGraphBuilder: Reference data to typed dependency graph
    CascadeContext: Graph cache owner and analysis entry point
    cascade: Propagation, country aggregation and redundancy analysis
"""

from .context import CascadeContext, get_cascade_context
from .graph_builder import DependencyGraphBuilder, normalize_country_code

__all__ = [
    "CascadeContext",
    "DependencyGraphBuilder",
    "get_cascade_context",
    "normalize_country_code",
]
