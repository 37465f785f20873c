"""
Cascade analysis router.

Wired to:
- CascadeContext for cascade simulation and redundancy lookups
- ReferenceData lookups for raw infrastructure records
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from infracascade.engine import CascadeContext, get_cascade_context, normalize_country_code
from infracascade.models.enums import NodeType
from infracascade.utils.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()


@router.get("/countries/{code}/dependencies")
async def get_country_dependencies(
    code: str,
    context: CascadeContext = Depends(get_cascade_context),
):
    """
    List the infrastructure a country depends on.
    """
    country_id = NodeType.COUNTRY.node_id(normalize_country_code(code).upper())
    edges = context.get_dependent_infrastructure(country_id)
    if edges is None:
        raise HTTPException(status_code=404, detail=f"Country {code} not found")

    return {
        "success": True,
        "data": {
            "country": country_id,
            "dependencies": [e.model_dump(mode="json") for e in edges],
        },
    }


@router.get("/infrastructure/{kind}/{raw_id}")
async def get_infrastructure_record(
    kind: str,
    raw_id: str,
    context: CascadeContext = Depends(get_cascade_context),
):
    """
    Get the raw reference record for a cable, pipeline or port.
    """
    lookups = {
        NodeType.CABLE.value: context.get_cable_by_id,
        NodeType.PIPELINE.value: context.get_pipeline_by_id,
        NodeType.PORT.value: context.get_port_by_id,
    }
    lookup = lookups.get(kind)
    if lookup is None:
        raise HTTPException(status_code=400, detail=f"Unsupported infrastructure kind: {kind}")

    record = lookup(raw_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"{kind} {raw_id} not found")

    return {"success": True, "data": record.model_dump(mode="json")}


@router.get("/{source_id}/redundancies")
async def get_redundancies(
    source_id: str,
    context: CascadeContext = Depends(get_cascade_context),
):
    """
    Get alternative cables for a disrupted cable.
    Non-cable sources yield an empty list.
    """
    candidates = context.find_redundancies(source_id)
    return {
        "success": True,
        "data": [c.model_dump(mode="json") for c in candidates],
    }


@router.get("/{source_id}")
async def simulate_cascade(
    source_id: str,
    disruption_level: float = Query(
        default=1.0,
        allow_inf_nan=False,
        description="Severity multiplier, conventionally 0..1",
    ),
    context: CascadeContext = Depends(get_cascade_context),
):
    """
    Simulate a disruption at a node and return its blast radius.
    """
    logger.info(
        "cascade_request",
        source_id=source_id,
        disruption_level=disruption_level,
    )

    result = context.simulate_cascade(source_id, disruption_level)
    if result is None:
        raise HTTPException(status_code=404, detail=f"Node {source_id} not found")

    return {"success": True, "data": result.model_dump(mode="json")}
