"""
Unit tests for the dependency graph builder and graph cache.

Clear naming: test_<component>_<behaviour>_<scenario>.
"""

import pytest

from infracascade.engine import CascadeContext, DependencyGraphBuilder, normalize_country_code
from infracascade.engine.graph_builder import IMPACT_WITH_REDUNDANCY, IMPACT_WITHOUT_REDUNDANCY
from infracascade.models.enums import EdgeType, NodeType
from tests.conftest import make_cable, make_pipeline, make_reference_data


# ============================================================================
# Country alias normalization
# ============================================================================


class TestNormalizeCountryCode:
    """Test alias canonicalization of country labels."""

    @pytest.mark.parametrize(
        "label,expected",
        [
            ("USA", "US"), ("Canada", "CA"), ("UK", "GB"), ("US", "US"), (" EG ", "EG"),
            ("usa", "US"), ("united kingdom", "GB"), ("aa", "aa"),
        ],
    )
    def test_normalize_country_code(self, label, expected):
        assert normalize_country_code(label) == expected


# ============================================================================
# Node construction
# ============================================================================


class TestGraphBuilderNodes:
    """Test node emission for every reference dataset."""

    def test_build_emits_namespaced_nodes_per_entity(self, single_cable_data):
        graph = DependencyGraphBuilder(single_cable_data).build()
        assert set(graph.nodes) == {
            "cable:test_cable",
            "port:rotterdam",
            "chokepoint:suez",
            "country:AA",
            "country:BB",
        }

    def test_build_cable_node_uses_first_point(self, single_cable_data):
        graph = DependencyGraphBuilder(single_cable_data).build()
        cable = graph.nodes["cable:test_cable"]
        assert cable.type == NodeType.CABLE
        assert cable.coordinates == (10.0, 20.0)
        assert cable.metadata.kind == "cable"
        assert cable.metadata.capacity_tbps == 100.0

    def test_build_port_node_coordinates_are_lon_lat(self, single_cable_data):
        graph = DependencyGraphBuilder(single_cable_data).build()
        port = graph.nodes["port:rotterdam"]
        assert port.coordinates == (4.14, 51.95)
        assert port.metadata.country == "NL"
        assert port.metadata.rank == 10

    def test_build_cable_without_points_has_no_coordinates(self):
        data = make_reference_data(cables=[make_cable(points=[])])
        graph = DependencyGraphBuilder(data).build()
        assert graph.nodes["cable:test_cable"].coordinates is None

    def test_build_country_node_name_falls_back_to_code(self):
        data = make_reference_data(
            cables=[make_cable(served=[("QQ", 0.5, False)])],
            country_names={},
        )
        graph = DependencyGraphBuilder(data).build()
        country = graph.nodes["country:QQ"]
        assert country.name == "QQ"
        assert country.coordinates is None
        assert country.metadata.code == "QQ"

    def test_build_landing_point_country_registered(self):
        data = make_reference_data(cables=[make_cable(served=[], landing=["LP"])])
        graph = DependencyGraphBuilder(data).build()
        assert "country:LP" in graph

    def test_build_aliased_countries_share_one_node(self):
        data = make_reference_data(
            cables=[make_cable(served=[("US", 0.5, False), ("UK", 0.5, True)])],
            pipelines=[make_pipeline(countries=["USA", "Canada"])],
        )
        graph = DependencyGraphBuilder(data).build()
        country_ids = {n.id for n in graph.nodes_of_type(NodeType.COUNTRY)}
        assert country_ids == {"country:US", "country:GB", "country:CA"}
        assert len(graph.incoming_edges("country:US")) == 2


# ============================================================================
# Edge construction
# ============================================================================


class TestGraphBuilderEdges:
    """Test edge weights and adjacency indexes."""

    def test_build_cable_serves_edges_weights(self, single_cable_data):
        graph = DependencyGraphBuilder(single_cable_data).build()
        to_a, to_b = graph.outgoing_edges("cable:test_cable")

        assert to_a.type == EdgeType.SERVES
        assert to_a.target == "country:AA"
        assert to_a.strength == 0.6
        assert to_a.redundancy == 0.0
        assert to_a.metadata.estimated_impact == IMPACT_WITHOUT_REDUNDANCY

        assert to_b.strength == 0.4
        assert to_b.redundancy == 0.5
        assert to_b.metadata.estimated_impact == IMPACT_WITH_REDUNDANCY

    def test_build_cable_landing_edges_follow_serves_edges(self):
        data = make_reference_data(cables=[make_cable(landing=["AA"])])
        graph = DependencyGraphBuilder(data).build()
        edges = graph.outgoing_edges("cable:test_cable")

        assert [e.type for e in edges] == [EdgeType.SERVES, EdgeType.SERVES, EdgeType.LANDS_AT]
        assert edges[2].strength == 0.3
        assert edges[2].redundancy == 0.5

    def test_build_pipeline_edges_weights(self):
        data = make_reference_data(pipelines=[make_pipeline(countries=["AA", "USA"])])
        graph = DependencyGraphBuilder(data).build()
        edges = graph.outgoing_edges("pipeline:test_pipeline")

        assert [e.target for e in edges] == ["country:AA", "country:US"]
        assert all(e.strength == 0.2 and e.redundancy == 0.3 for e in edges)

    def test_build_indexes_consistent_with_edge_list(self, multi_cable_data):
        graph = DependencyGraphBuilder(multi_cable_data).build()

        assert sum(len(v) for v in graph.outgoing.values()) == len(graph.edges)
        assert sum(len(v) for v in graph.incoming.values()) == len(graph.edges)
        for edge in graph.edges:
            assert edge in graph.outgoing[edge.source]
            assert edge in graph.incoming[edge.target]

    def test_build_every_edge_endpoint_exists(self, multi_cable_data):
        graph = DependencyGraphBuilder(multi_cable_data).build()
        for edge in graph.edges:
            assert edge.source in graph
            assert edge.target in graph

    def test_build_counts_multi_cable(self, multi_cable_data):
        graph = DependencyGraphBuilder(multi_cable_data).build()
        # 8 cables + 1 pipeline + 1 port + 1 chokepoint + 7 countries
        assert len(graph.nodes) == 18
        # primary 4 + alternates 12 + unrelated 1 + pipeline 3
        assert len(graph.edges) == 20

    def test_to_networkx_mirrors_graph(self, multi_cable_data):
        graph = DependencyGraphBuilder(multi_cable_data).build()
        nx_graph = graph.to_networkx()
        assert nx_graph.number_of_nodes() == len(graph.nodes)
        assert nx_graph.number_of_edges() == len(graph.edges)


# ============================================================================
# Graph cache
# ============================================================================


class TestCascadeContextCache:
    """Test the build/invalidate lifecycle of the graph cache."""

    def test_build_graph_returns_cached_instance(self, single_cable_context):
        first = single_cable_context.build_graph()
        second = single_cable_context.build_graph()
        assert first is second

    def test_graph_stats_stable_across_calls(self, multi_cable_context):
        assert multi_cable_context.graph_stats() == multi_cable_context.graph_stats()

    def test_invalidate_forces_rebuild_with_same_counts(self, multi_cable_context):
        original = multi_cable_context.build_graph()
        stats_before = multi_cable_context.graph_stats()

        multi_cable_context.invalidate_graph()
        rebuilt = multi_cable_context.build_graph()

        assert rebuilt is not original
        assert multi_cable_context.graph_stats() == stats_before

    def test_graph_stats_breakdown(self, single_cable_context):
        stats = single_cable_context.graph_stats()
        assert stats.nodes == 5
        assert stats.edges == 2
        assert stats.cables == 1
        assert stats.pipelines == 0
        assert stats.ports == 1
        assert stats.chokepoints == 1
        assert stats.countries == 2

    def test_contexts_do_not_share_graphs(self, single_cable_data):
        a = CascadeContext(single_cable_data)
        b = CascadeContext(single_cable_data)
        assert a.build_graph() is not b.build_graph()
