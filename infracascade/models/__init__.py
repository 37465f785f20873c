"""
Pydantic v2 data models for the infrastructure cascade engine.

Model Organization:
    - enums: Node, edge and impact-level enumerations
    - reference: Read-only reference dataset records
    - graph: Dependency graph nodes, edges and the graph aggregate
    - cascade: Cascade simulation results and graph statistics

Usage:
    >>> from infracascade.models import NodeType, InfrastructureNode
    >>> NodeType.CABLE.node_id("marea")
    'cable:marea'
"""

from .cascade import (
    CascadeAffectedNode,
    CascadeResult,
    CountryImpact,
    GraphStats,
    RedundancyCandidate,
)
from .enums import EdgeType, ImpactLevel, NodeType
from .graph import (
    CableMetadata,
    ChokepointMetadata,
    CountryMetadata,
    DependencyEdge,
    DependencyGraph,
    EdgeMetadata,
    InfrastructureNode,
    PipelineMetadata,
    PortMetadata,
)
from .reference import (
    CountryCapacity,
    LandingPoint,
    Pipeline,
    Port,
    ReferenceData,
    UnderseaCable,
    Waterway,
)

__all__ = [
    # Enums
    "EdgeType",
    "ImpactLevel",
    "NodeType",
    # Reference data
    "CountryCapacity",
    "LandingPoint",
    "Pipeline",
    "Port",
    "ReferenceData",
    "UnderseaCable",
    "Waterway",
    # Graph
    "CableMetadata",
    "ChokepointMetadata",
    "CountryMetadata",
    "DependencyEdge",
    "DependencyGraph",
    "EdgeMetadata",
    "InfrastructureNode",
    "PipelineMetadata",
    "PortMetadata",
    # Cascade
    "CascadeAffectedNode",
    "CascadeResult",
    "CountryImpact",
    "GraphStats",
    "RedundancyCandidate",
]
