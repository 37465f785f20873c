"""
Cascade result models for the infrastructure cascade engine.

This module defines the report produced when a single node is disrupted:
which nodes are reached, how hard they are hit, which countries are affected
and which alternative cables could absorb the loss.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .enums import ImpactLevel
from .graph import InfrastructureNode


class CascadeAffectedNode(BaseModel):
    """
    A node reached by a cascade.

    Attributes:
        node: The affected node
        impact_level: Categorized severity
        impact_strength: Redundancy-adjusted fraction of capacity lost
        path_length: Hops from the disrupted source (1..max depth)
        dependency_chain: Node ids from the source to this node, inclusive
        redundancy_available: True when the reaching edge has redundancy > 0.3
        estimated_recovery: Qualitative recovery estimate from edge metadata
    """

    node: InfrastructureNode
    impact_level: ImpactLevel
    impact_strength: float = Field(description="Redundancy-adjusted fraction of capacity lost")
    path_length: int = Field(description="Hops from the disrupted source", ge=1)
    dependency_chain: list[str] = Field(description="Node ids from source to this node")
    redundancy_available: bool
    estimated_recovery: Optional[str] = None


class CountryImpact(BaseModel):
    """Country-level view of a cascade entry."""

    country: str = Field(description="Country code")
    country_name: str
    impact_level: ImpactLevel
    affected_capacity: float = Field(
        description="Capacity share lost (0.1 placeholder for non-cable sources)"
    )


class RedundancyCandidate(BaseModel):
    """An alternative cable serving countries shared with the disrupted one."""

    id: str = Field(description="Raw cable id")
    name: str
    capacity_share: float = Field(
        description="Mean capacity share across the overlapping countries"
    )


class CascadeResult(BaseModel):
    """
    Complete cascade report for one disruption.

    Built fresh on every simulation call; never cached.

    Attributes:
        source: The disrupted node
        disruption_level: Severity multiplier of the initiating failure
        affected_nodes: Reached nodes in breadth-first discovery order
        countries_affected: Country impacts ordered by severity then capacity
        redundancies: Alternative cables (cable sources only)
    """

    source: InfrastructureNode
    disruption_level: float
    affected_nodes: list[CascadeAffectedNode] = Field(default_factory=list)
    countries_affected: list[CountryImpact] = Field(default_factory=list)
    redundancies: list[RedundancyCandidate] = Field(default_factory=list)


class GraphStats(BaseModel):
    """Node and edge counts for diagnostics."""

    nodes: int = Field(ge=0)
    edges: int = Field(ge=0)
    cables: int = Field(ge=0)
    pipelines: int = Field(ge=0)
    ports: int = Field(ge=0)
    chokepoints: int = Field(ge=0)
    countries: int = Field(ge=0)
