"""
Cascade Assessment Engine.

Components:
    CascadeSimulator: Depth-bounded BFS propagation of a disruption
    CountryImpactAggregator: Country-level impacts ranked by severity
    RedundancyAnalyzer: Alternative cables for a disrupted cable

Example:
    >>> from infracascade.engine.cascade import CascadeSimulator
    >>> simulator = CascadeSimulator(graph)
    >>> affected = simulator.propagate("cable:marea")
"""

from .country_impact import CountryImpactAggregator
from .redundancy import RedundancyAnalyzer
from .simulator import CascadeSimulator, categorize_impact, compute_impact_strength

__all__ = [
    "CascadeSimulator",
    "CountryImpactAggregator",
    "RedundancyAnalyzer",
    "categorize_impact",
    "compute_impact_strength",
]
