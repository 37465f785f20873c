"""
Pytest configuration and shared fixtures for the infracascade test suite.

Provides reference-data factories, small hand-built graphs and an API client
bound to an isolated cascade context.
"""

import os

import pytest
from fastapi.testclient import TestClient

# Set environment BEFORE importing app
os.environ["INFRACASCADE_DEV_MODE"] = "true"
os.environ["INFRACASCADE_LOG_LEVEL"] = "warning"

from infracascade.adapters import InMemoryReferenceAdapter
from infracascade.engine import CascadeContext
from infracascade.models.enums import EdgeType, NodeType
from infracascade.models.graph import (
    CountryMetadata,
    DependencyEdge,
    DependencyGraph,
    InfrastructureNode,
)
from infracascade.models.reference import (
    CountryCapacity,
    LandingPoint,
    Pipeline,
    Port,
    ReferenceData,
    UnderseaCable,
    Waterway,
)


# ---------------------------------------------------------------------------
# Reference data factories — reusable across all test suites
# ---------------------------------------------------------------------------

def make_cable(
    cable_id: str = "test_cable",
    served: list[tuple[str, float, bool]] = None,
    landing: list[str] = None,
    **overrides,
) -> UnderseaCable:
    """Factory for UnderseaCable; ``served`` is (country, share, redundant)."""
    served = served if served is not None else [("AA", 0.6, False), ("BB", 0.4, True)]
    defaults = dict(
        id=cable_id,
        name=cable_id.replace("_", " ").title(),
        points=[(10.0, 20.0), (11.0, 21.0)],
        capacity_tbps=100.0,
        rfs_year=2020,
        owners=["Test Telecom"],
        landing_points=[LandingPoint(country=c) for c in (landing or [])],
        countries_served=[
            CountryCapacity(country=c, capacity_share=s, is_redundant=r)
            for c, s, r in served
        ],
    )
    defaults.update(overrides)
    return UnderseaCable(**defaults)


def make_pipeline(
    pipeline_id: str = "test_pipeline",
    countries: list[str] = None,
    **overrides,
) -> Pipeline:
    """Factory for Pipeline records."""
    defaults = dict(
        id=pipeline_id,
        name=pipeline_id.replace("_", " ").title(),
        type="oil",
        status="operating",
        capacity="100,000 bpd",
        operator="Test Energy",
        countries=countries if countries is not None else ["AA"],
        points=[(30.0, 40.0)],
    )
    defaults.update(overrides)
    return Pipeline(**defaults)


def make_reference_data(
    cables: list[UnderseaCable] = None,
    pipelines: list[Pipeline] = None,
    ports: list[Port] = None,
    waterways: list[Waterway] = None,
    country_names: dict[str, str] = None,
) -> ReferenceData:
    """Factory for ReferenceData bundles."""
    return ReferenceData(
        cables=cables if cables is not None else [make_cable()],
        pipelines=pipelines or [],
        ports=ports if ports is not None else [
            Port(id="rotterdam", name="Port of Rotterdam", country="NL",
                 type="container", rank=10, lat=51.95, lon=4.14),
        ],
        waterways=waterways if waterways is not None else [
            Waterway(id="suez", name="Suez Canal", lat=30.5, lon=32.3,
                     description="Red Sea link"),
        ],
        country_names=country_names if country_names is not None else {
            "AA": "Alphaland",
            "BB": "Betaland",
        },
    )


def make_country_node(code: str) -> InfrastructureNode:
    return InfrastructureNode(
        id=NodeType.COUNTRY.node_id(code),
        type=NodeType.COUNTRY,
        name=code,
        metadata=CountryMetadata(code=code),
    )


def make_chain_graph(
    length: int,
    strength: float = 1.0,
    redundancy: float = 0.0,
) -> DependencyGraph:
    """
    Hand-built linear graph country:N0 → country:N1 → ... of ``length`` edges.

    The builder only produces one-hop graphs, so multi-hop behaviour is
    exercised on graphs assembled directly.
    """
    graph = DependencyGraph()
    for i in range(length + 1):
        graph.add_node(make_country_node(f"N{i}"))
    for i in range(length):
        graph.add_edge(DependencyEdge(
            source=f"country:N{i}",
            target=f"country:N{i + 1}",
            type=EdgeType.SERVES,
            strength=strength,
            redundancy=redundancy,
        ))
    return graph


# ---------------------------------------------------------------------------
# Pytest fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def single_cable_data():
    """One cable serving AA (0.6, not redundant) and BB (0.4, redundant)."""
    return InMemoryReferenceAdapter(make_reference_data()).load()


@pytest.fixture
def single_cable_context(single_cable_data):
    """Fresh CascadeContext over the single-cable dataset."""
    return CascadeContext(single_cable_data)


@pytest.fixture
def multi_cable_data():
    """Seven cables overlapping on AA, a pipeline with aliased countries."""
    cables = [
        make_cable("primary", served=[("AA", 0.6, False), ("BB", 0.4, True)], landing=["AA", "CC"]),
    ]
    for i in range(6):
        cables.append(make_cable(f"alt_{i}", served=[("AA", 0.1 * (i + 1), True), ("DD", 0.5, False)]))
    cables.append(make_cable("unrelated", served=[("ZZ", 0.9, False)]))

    return InMemoryReferenceAdapter(make_reference_data(
        cables=cables,
        pipelines=[
            make_pipeline("crossborder", countries=["Canada", "USA", "AA"]),
        ],
    )).load()


@pytest.fixture
def multi_cable_context(multi_cable_data):
    return CascadeContext(multi_cable_data)


@pytest.fixture
def client(single_cable_context):
    """FastAPI test client bound to the single-cable context."""
    from infracascade.engine import get_cascade_context
    from infracascade.main import app

    app.dependency_overrides[get_cascade_context] = lambda: single_cable_context
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
