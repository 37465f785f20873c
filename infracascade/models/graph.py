"""
Dependency graph models for the infrastructure cascade engine.

This module defines the typed vertices and weighted directed edges of the
infrastructure dependency graph, and the graph aggregate that indexes them.

Node metadata is a discriminated union keyed on ``kind`` so each node type
carries exactly one concrete payload shape instead of an untyped mapping.
"""

from typing import Annotated, Literal, Optional, Union

import networkx as nx
from pydantic import BaseModel, ConfigDict, Field

from .enums import EdgeType, NodeType
from .reference import Coordinate, LandingPoint


class CableMetadata(BaseModel):
    """Payload for cable nodes."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["cable"] = "cable"
    capacity_tbps: Optional[float] = None
    rfs_year: Optional[int] = None
    owners: list[str] = Field(default_factory=list)
    landing_points: list[LandingPoint] = Field(default_factory=list)


class PipelineMetadata(BaseModel):
    """Payload for pipeline nodes."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["pipeline"] = "pipeline"
    pipeline_type: str
    status: str
    capacity: Optional[str] = None
    operator: Optional[str] = None
    countries: list[str] = Field(default_factory=list)


class PortMetadata(BaseModel):
    """Payload for port nodes."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["port"] = "port"
    country: str
    port_type: str
    rank: Optional[int] = None


class ChokepointMetadata(BaseModel):
    """Payload for chokepoint nodes."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["chokepoint"] = "chokepoint"
    description: str = ""


class CountryMetadata(BaseModel):
    """Payload for country nodes."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["country"] = "country"
    code: str


NodeMetadata = Annotated[
    Union[
        CableMetadata,
        PipelineMetadata,
        PortMetadata,
        ChokepointMetadata,
        CountryMetadata,
    ],
    Field(discriminator="kind"),
]


class InfrastructureNode(BaseModel):
    """
    A typed vertex of the dependency graph.

    Attributes:
        id: Namespaced id ``"<type>:<raw id>"``, never reused across kinds
        type: Node kind
        name: Human-readable label
        coordinates: Optional (lon, lat); absent for country nodes
        metadata: Type-specific payload
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Namespaced node id '<type>:<raw id>'")
    type: NodeType = Field(description="Node kind")
    name: str = Field(description="Human-readable label")
    coordinates: Optional[Coordinate] = Field(
        default=None, description="(lon, lat) of the node, if known"
    )
    metadata: NodeMetadata = Field(description="Type-specific payload")


class EdgeMetadata(BaseModel):
    """Optional annotations carried by an edge."""

    model_config = ConfigDict(frozen=True)

    capacity_share: Optional[float] = None
    estimated_impact: Optional[str] = Field(
        default=None, description="Qualitative recovery estimate"
    )


class DependencyEdge(BaseModel):
    """
    A directed, weighted dependency between two nodes.

    ``strength`` is the fraction of source capacity the edge represents;
    ``redundancy`` the fraction of impact alternative paths can absorb
    (0 means no mitigation). Both are independently bounded to [0, 1].
    """

    model_config = ConfigDict(frozen=True)

    source: str = Field(description="Upstream node id")
    target: str = Field(description="Downstream node id")
    type: EdgeType
    strength: float = Field(ge=0.0, le=1.0)
    redundancy: float = Field(default=0.0, ge=0.0, le=1.0)
    metadata: EdgeMetadata = Field(default_factory=EdgeMetadata)


class DependencyGraph:
    """
    Infrastructure dependency graph with adjacency indexes.

    ``outgoing`` and ``incoming`` are derived from ``edges`` and are only
    ever updated through :meth:`add_edge`, so the three stay consistent.
    Edge order is construction order.

    Attributes:
        nodes: Node id to node, in insertion order
        edges: All edges in construction order
        outgoing: Node id to edges leaving that node
        incoming: Node id to edges entering that node
    """

    def __init__(self):
        self.nodes: dict[str, InfrastructureNode] = {}
        self.edges: list[DependencyEdge] = []
        self.outgoing: dict[str, list[DependencyEdge]] = {}
        self.incoming: dict[str, list[DependencyEdge]] = {}

    def __contains__(self, node_id: str) -> bool:
        return node_id in self.nodes

    def add_node(self, node: InfrastructureNode) -> None:
        self.nodes[node.id] = node

    def add_edge(self, edge: DependencyEdge) -> None:
        self.edges.append(edge)
        self.outgoing.setdefault(edge.source, []).append(edge)
        self.incoming.setdefault(edge.target, []).append(edge)

    def get_node(self, node_id: str) -> Optional[InfrastructureNode]:
        return self.nodes.get(node_id)

    def outgoing_edges(self, node_id: str) -> list[DependencyEdge]:
        return self.outgoing.get(node_id, [])

    def incoming_edges(self, node_id: str) -> list[DependencyEdge]:
        return self.incoming.get(node_id, [])

    def nodes_of_type(self, node_type: NodeType) -> list[InfrastructureNode]:
        return [n for n in self.nodes.values() if n.type == node_type]

    def to_networkx(self) -> nx.MultiDiGraph:
        """
        Export the graph as a NetworkX MultiDiGraph for structural analysis.

        Edge endpoints missing from ``nodes`` still appear as bare vertices
        (without a ``type`` attribute), which makes dangling references easy
        to spot.

        Returns:
            MultiDiGraph with node ``type``/``name`` attributes and edge
            ``type``/``strength``/``redundancy`` attributes
        """
        g = nx.MultiDiGraph()
        for node in self.nodes.values():
            g.add_node(node.id, type=node.type.value, name=node.name)
        for edge in self.edges:
            g.add_edge(
                edge.source,
                edge.target,
                type=edge.type.value,
                strength=edge.strength,
                redundancy=edge.redundancy,
            )
        return g
