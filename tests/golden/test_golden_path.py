"""
Golden-path tests over the bundled reference datasets.

Pins known cascade outcomes so changes to weights, alias handling or
ordering show up as explicit diffs.
"""

import pytest

from infracascade.adapters import JsonReferenceAdapter
from infracascade.config import DEFAULT_DATA_DIR
from infracascade.engine import CascadeContext
from infracascade.models.enums import ImpactLevel


@pytest.fixture(scope="module")
def bundled_context():
    return CascadeContext(JsonReferenceAdapter(DEFAULT_DATA_DIR).load())


def test_golden_stats_consistent(bundled_context):
    stats = bundled_context.graph_stats()
    assert stats.cables == 6
    assert stats.pipelines == 5
    assert stats.ports == 7
    assert stats.chokepoints == 6
    assert stats.nodes == (
        stats.cables + stats.pipelines + stats.ports + stats.chokepoints + stats.countries
    )


def test_golden_marea_cascade(bundled_context):
    result = bundled_context.simulate_cascade("cable:marea")

    countries = [(c.country, c.impact_level, c.affected_capacity) for c in result.countries_affected]
    assert countries == [
        ("ES", ImpactLevel.HIGH, 0.6),
        ("US", ImpactLevel.LOW, 0.4),
    ]
    assert [c.country_name for c in result.countries_affected] == ["Spain", "United States"]


def test_golden_marea_redundancies(bundled_context):
    candidates = bundled_context.find_redundancies("cable:marea")
    assert [c.id for c in candidates] == ["grace_hopper"]
    # US 0.35 and ES 0.25 overlap; the UK entry does not
    assert candidates[0].capacity_share == pytest.approx(0.3)


def test_golden_uk_alias_resolves_to_gb(bundled_context):
    graph = bundled_context.build_graph()
    assert "country:UK" not in graph
    sources = {e.source for e in graph.incoming_edges("country:GB")}
    assert "cable:grace_hopper" in sources
    assert "cable:2africa" in sources


def test_golden_keystone_aliases(bundled_context):
    result = bundled_context.simulate_cascade("pipeline:keystone")
    assert [c.country for c in result.countries_affected] == ["CA", "US"]
    assert all(c.affected_capacity == 0.1 for c in result.countries_affected)


def test_golden_chokepoint_has_no_edges(bundled_context):
    result = bundled_context.simulate_cascade("chokepoint:suez")
    assert result is not None
    assert result.affected_nodes == []
    assert bundled_context.find_redundancies("chokepoint:suez") == []


def test_golden_seamewe6_critical_country(bundled_context):
    result = bundled_context.simulate_cascade("cable:seamewe6")
    first = result.countries_affected[0]
    assert first.country == "BD"
    assert first.impact_level == ImpactLevel.CRITICAL
