"""
System diagnostics router.

Wired to:
- CascadeContext for graph statistics and cache control

Liveness is served at the application root (`GET /health`).
"""

from fastapi import APIRouter, Depends

from infracascade.engine import CascadeContext, get_cascade_context
from infracascade.utils.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()


@router.get("/graph-stats")
async def graph_stats(context: CascadeContext = Depends(get_cascade_context)):
    """
    Get node and edge counts of the dependency graph.
    """
    stats = context.graph_stats()
    logger.info("graph_stats_request", nodes=stats.nodes, edges=stats.edges)
    return {"success": True, "data": stats.model_dump()}


@router.post("/graph/invalidate")
async def invalidate_graph(context: CascadeContext = Depends(get_cascade_context)):
    """
    Drop the cached graph and rebuild it from the reference data.
    """
    context.invalidate_graph()
    stats = context.graph_stats()
    return {"success": True, "data": stats.model_dump()}
