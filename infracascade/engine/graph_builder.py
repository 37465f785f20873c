"""
Infrastructure Dependency Graph Builder.

This module converts the static reference datasets into a typed, weighted,
directed dependency graph. Edges point from a piece of infrastructure to the
country that depends on it: A → B means "a disruption at A propagates to B".

Construction order (each step only adds nodes/edges, never removes):
1. One node per cable, pipeline, port and chokepoint
2. One node per distinct (normalized) country code referenced by cables
   (served countries and landing points) or pipelines
3. Cable → country edges: ``serves`` per served country, ``lands_at`` per
   landing point
4. Pipeline → country ``serves`` edges, only towards registered countries

Edge weights:
- cable serves:    strength = capacity share, redundancy 0.5 if redundant else 0
- cable lands_at:  strength 0.3, redundancy 0.5
- pipeline serves: strength 0.2, redundancy 0.3

Version: infra_graph_v1
"""

from typing import Optional

import structlog

from infracascade.models.enums import EdgeType, NodeType
from infracascade.models.graph import (
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
from infracascade.models.reference import Coordinate, ReferenceData

logger = structlog.get_logger()

# Alternate country labels seen in the datasets, canonicalized before the
# country node is created so every edge to a country lands on one node.
COUNTRY_ALIASES = {
    "USA": "US",
    "United States": "US",
    "Canada": "CA",
    "UK": "GB",
    "United Kingdom": "GB",
    "Russia": "RU",
    "UAE": "AE",
}

REDUNDANT_SERVES_REDUNDANCY = 0.5
LANDING_POINT_STRENGTH = 0.3
LANDING_POINT_REDUNDANCY = 0.5
PIPELINE_SERVES_STRENGTH = 0.2
PIPELINE_SERVES_REDUNDANCY = 0.3

IMPACT_WITH_REDUNDANCY = "Medium - redundancy available"
IMPACT_WITHOUT_REDUNDANCY = "High - limited redundancy"


_ALIASES_BY_UPPER = {alias.upper(): code for alias, code in COUNTRY_ALIASES.items()}


def normalize_country_code(label: str) -> str:
    """Canonicalize an aliased country label to its code (alias match ignores case)."""
    label = label.strip()
    return _ALIASES_BY_UPPER.get(label.upper(), label)


def _first_point(points: list[Coordinate]) -> Optional[Coordinate]:
    return (points[0][0], points[0][1]) if points else None


class DependencyGraphBuilder:
    """
    Builds the infrastructure dependency graph from reference data.

    Every call to :meth:`build` produces a brand-new graph; caching is the
    responsibility of the owning CascadeContext.

    Attributes:
        reference_data: Read-only reference datasets
        logger: Structured logger

    Example:
        >>> builder = DependencyGraphBuilder(reference_data)
        >>> graph = builder.build()
        >>> print(len(graph.nodes), len(graph.edges))
    """

    VERSION = "infra_graph_v1"

    def __init__(self, reference_data: ReferenceData):
        self.reference_data = reference_data
        self.logger = structlog.get_logger()

    def build(self) -> DependencyGraph:
        """
        Build a new dependency graph.

        Returns:
            Fully indexed DependencyGraph
        """
        graph = DependencyGraph()

        self._add_cable_nodes(graph)
        self._add_pipeline_nodes(graph)
        self._add_port_nodes(graph)
        self._add_chokepoint_nodes(graph)
        self._add_country_nodes(graph)

        self._add_cable_country_edges(graph)
        self._add_pipeline_country_edges(graph)

        # Edge endpoints absent from graph.nodes show up untyped in the export
        nx_graph = graph.to_networkx()
        dangling = [n for n, attrs in nx_graph.nodes(data=True) if "type" not in attrs]

        self.logger.info(
            "dependency_graph_built",
            version=self.VERSION,
            node_count=len(graph.nodes),
            edge_count=len(graph.edges),
            dangling_endpoints=len(dangling),
        )

        return graph

    def _add_cable_nodes(self, graph: DependencyGraph) -> None:
        for cable in self.reference_data.cables:
            graph.add_node(InfrastructureNode(
                id=NodeType.CABLE.node_id(cable.id),
                type=NodeType.CABLE,
                name=cable.name,
                coordinates=_first_point(cable.points),
                metadata=CableMetadata(
                    capacity_tbps=cable.capacity_tbps,
                    rfs_year=cable.rfs_year,
                    owners=cable.owners,
                    landing_points=cable.landing_points,
                ),
            ))

    def _add_pipeline_nodes(self, graph: DependencyGraph) -> None:
        for pipeline in self.reference_data.pipelines:
            graph.add_node(InfrastructureNode(
                id=NodeType.PIPELINE.node_id(pipeline.id),
                type=NodeType.PIPELINE,
                name=pipeline.name,
                coordinates=_first_point(pipeline.points),
                metadata=PipelineMetadata(
                    pipeline_type=pipeline.type,
                    status=pipeline.status,
                    capacity=pipeline.capacity,
                    operator=pipeline.operator,
                    countries=pipeline.countries,
                ),
            ))

    def _add_port_nodes(self, graph: DependencyGraph) -> None:
        for port in self.reference_data.ports:
            graph.add_node(InfrastructureNode(
                id=NodeType.PORT.node_id(port.id),
                type=NodeType.PORT,
                name=port.name,
                coordinates=(port.lon, port.lat),
                metadata=PortMetadata(
                    country=port.country,
                    port_type=port.type,
                    rank=port.rank,
                ),
            ))

    def _add_chokepoint_nodes(self, graph: DependencyGraph) -> None:
        for waterway in self.reference_data.waterways:
            graph.add_node(InfrastructureNode(
                id=NodeType.CHOKEPOINT.node_id(waterway.id),
                type=NodeType.CHOKEPOINT,
                name=waterway.name,
                coordinates=(waterway.lon, waterway.lat),
                metadata=ChokepointMetadata(description=waterway.description),
            ))

    def _add_country_nodes(self, graph: DependencyGraph) -> None:
        # dict preserves first-seen order, which keeps node order deterministic
        codes: dict[str, None] = {}

        for cable in self.reference_data.cables:
            for served in cable.countries_served:
                codes[normalize_country_code(served.country)] = None
            for landing in cable.landing_points:
                codes[normalize_country_code(landing.country)] = None

        for pipeline in self.reference_data.pipelines:
            for country in pipeline.countries:
                codes[normalize_country_code(country)] = None

        for code in codes:
            graph.add_node(InfrastructureNode(
                id=NodeType.COUNTRY.node_id(code),
                type=NodeType.COUNTRY,
                name=self.reference_data.country_name(code),
                metadata=CountryMetadata(code=code),
            ))

    def _add_cable_country_edges(self, graph: DependencyGraph) -> None:
        for cable in self.reference_data.cables:
            cable_id = NodeType.CABLE.node_id(cable.id)

            for served in cable.countries_served:
                graph.add_edge(DependencyEdge(
                    source=cable_id,
                    target=NodeType.COUNTRY.node_id(normalize_country_code(served.country)),
                    type=EdgeType.SERVES,
                    strength=served.capacity_share,
                    redundancy=REDUNDANT_SERVES_REDUNDANCY if served.is_redundant else 0.0,
                    metadata=EdgeMetadata(
                        capacity_share=served.capacity_share,
                        estimated_impact=(
                            IMPACT_WITH_REDUNDANCY if served.is_redundant
                            else IMPACT_WITHOUT_REDUNDANCY
                        ),
                    ),
                ))

            for landing in cable.landing_points:
                graph.add_edge(DependencyEdge(
                    source=cable_id,
                    target=NodeType.COUNTRY.node_id(normalize_country_code(landing.country)),
                    type=EdgeType.LANDS_AT,
                    strength=LANDING_POINT_STRENGTH,
                    redundancy=LANDING_POINT_REDUNDANCY,
                ))

    def _add_pipeline_country_edges(self, graph: DependencyGraph) -> None:
        for pipeline in self.reference_data.pipelines:
            pipeline_id = NodeType.PIPELINE.node_id(pipeline.id)

            for country in pipeline.countries:
                country_id = NodeType.COUNTRY.node_id(normalize_country_code(country))

                if country_id not in graph:
                    self.logger.debug(
                        "pipeline_edge_skipped",
                        pipeline_id=pipeline_id,
                        country_id=country_id,
                    )
                    continue

                graph.add_edge(DependencyEdge(
                    source=pipeline_id,
                    target=country_id,
                    type=EdgeType.SERVES,
                    strength=PIPELINE_SERVES_STRENGTH,
                    redundancy=PIPELINE_SERVES_REDUNDANCY,
                ))
