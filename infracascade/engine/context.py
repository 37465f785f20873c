"""
Cascade Context — owner of the dependency graph cache.

The context holds the reference data, builds the dependency graph lazily
and caches it until ``invalidate_graph()`` is called. All cascade,
redundancy and diagnostics operations go through a context so every caller
sees the same graph snapshot.

The cache is guarded by a lock with a double-checked build, so concurrent
first callers trigger at most one build per invalidation cycle. Once built,
the graph is only read.
"""

import threading
from functools import lru_cache
from typing import Optional

import structlog

from infracascade.adapters import get_reference_data
from infracascade.config import get_settings
from infracascade.models.cascade import CascadeResult, GraphStats, RedundancyCandidate
from infracascade.models.enums import NodeType
from infracascade.models.graph import DependencyEdge, DependencyGraph
from infracascade.models.reference import Pipeline, Port, ReferenceData, UnderseaCable

from .cascade import CascadeSimulator, CountryImpactAggregator, RedundancyAnalyzer
from .cascade.simulator import DEFAULT_MAX_DEPTH, DEFAULT_NOISE_FLOOR
from .cascade.redundancy import DEFAULT_MAX_CANDIDATES
from .graph_builder import DependencyGraphBuilder

logger = structlog.get_logger()


class CascadeContext:
    """
    Entry point for cascade analysis over one set of reference data.

    Attributes:
        reference_data: Read-only reference datasets
        max_depth: Blast-radius bound passed to the simulator
        noise_floor: Minimum reported impact strength
        logger: Structured logger

    Example:
        >>> context = CascadeContext(reference_data)
        >>> result = context.simulate_cascade("cable:marea", disruption_level=0.5)
        >>> if result is not None:
        ...     for country in result.countries_affected:
        ...         print(country.country_name, country.impact_level.value)
    """

    def __init__(
        self,
        reference_data: ReferenceData,
        max_depth: int = DEFAULT_MAX_DEPTH,
        noise_floor: float = DEFAULT_NOISE_FLOOR,
        max_redundancy_candidates: int = DEFAULT_MAX_CANDIDATES,
    ):
        self.reference_data = reference_data
        self.max_depth = max_depth
        self.noise_floor = noise_floor
        self.logger = structlog.get_logger()

        self._graph: Optional[DependencyGraph] = None
        self._lock = threading.Lock()
        self._builder = DependencyGraphBuilder(reference_data)
        self._aggregator = CountryImpactAggregator(reference_data)
        self._redundancy = RedundancyAnalyzer(
            reference_data, max_candidates=max_redundancy_candidates
        )

    def build_graph(self) -> DependencyGraph:
        """
        Return the cached dependency graph, building it on first use.

        Repeated calls return the identical instance until
        :meth:`invalidate_graph` is called.
        """
        graph = self._graph
        if graph is not None:
            return graph

        with self._lock:
            if self._graph is None:
                self._graph = self._builder.build()
            return self._graph

    def invalidate_graph(self) -> None:
        """Drop the cached graph; the next build_graph() rebuilds it."""
        with self._lock:
            self._graph = None
        self.logger.info("graph_cache_invalidated")

    def simulate_cascade(
        self,
        source_id: str,
        disruption_level: float = 1.0,
    ) -> Optional[CascadeResult]:
        """
        Simulate a disruption at ``source_id``.

        Args:
            source_id: Namespaced node id, e.g. ``"cable:marea"``
            disruption_level: Severity multiplier, conventionally in [0, 1];
                the caller is responsible for the range

        Returns:
            Fresh CascadeResult, or None when the source is not in the graph
        """
        graph = self.build_graph()
        simulator = CascadeSimulator(
            graph, max_depth=self.max_depth, noise_floor=self.noise_floor
        )

        affected = simulator.propagate(source_id, disruption_level)
        if affected is None:
            return None

        result = CascadeResult(
            source=graph.nodes[source_id],
            disruption_level=disruption_level,
            affected_nodes=affected,
            countries_affected=self._aggregator.aggregate(source_id, affected),
            redundancies=self._redundancy.find_redundancies(source_id),
        )

        self.logger.info(
            "cascade_simulated",
            source_id=source_id,
            disruption_level=disruption_level,
            affected_count=len(result.affected_nodes),
            country_count=len(result.countries_affected),
            redundancy_count=len(result.redundancies),
        )

        return result

    def find_redundancies(self, source_id: str) -> list[RedundancyCandidate]:
        return self._redundancy.find_redundancies(source_id)

    def graph_stats(self) -> GraphStats:
        """Node/edge counts of the current graph, broken down by node type."""
        graph = self.build_graph()
        counts = {node_type: 0 for node_type in NodeType}
        for node in graph.nodes.values():
            counts[node.type] += 1

        return GraphStats(
            nodes=len(graph.nodes),
            edges=len(graph.edges),
            cables=counts[NodeType.CABLE],
            pipelines=counts[NodeType.PIPELINE],
            ports=counts[NodeType.PORT],
            chokepoints=counts[NodeType.CHOKEPOINT],
            countries=counts[NodeType.COUNTRY],
        )

    def get_dependent_infrastructure(self, country_id: str) -> Optional[list[DependencyEdge]]:
        """
        Edges from infrastructure into a country node.

        Args:
            country_id: Namespaced country id, e.g. ``"country:EG"``

        Returns:
            Incoming edges in construction order, or None if the node is
            not a country in the graph
        """
        graph = self.build_graph()
        node = graph.get_node(country_id)
        if node is None or node.type != NodeType.COUNTRY:
            return None
        return list(graph.incoming_edges(country_id))

    def get_cable_by_id(self, cable_id: str) -> Optional[UnderseaCable]:
        return self.reference_data.get_cable_by_id(cable_id)

    def get_pipeline_by_id(self, pipeline_id: str) -> Optional[Pipeline]:
        return self.reference_data.get_pipeline_by_id(pipeline_id)

    def get_port_by_id(self, port_id: str) -> Optional[Port]:
        return self.reference_data.get_port_by_id(port_id)


@lru_cache
def get_cascade_context() -> CascadeContext:
    """
    Get the cached default cascade context (singleton).

    Bound to the configured reference data and engine settings.
    """
    settings = get_settings()
    return CascadeContext(
        get_reference_data(),
        max_depth=settings.cascade_max_depth,
        noise_floor=settings.impact_noise_floor,
        max_redundancy_candidates=settings.max_redundancy_candidates,
    )
