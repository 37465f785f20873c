"""
Enumeration types for the infrastructure cascade engine.

All enums inherit from str to ensure JSON serialization compatibility.
"""

from enum import Enum


class NodeType(str, Enum):
    """
    Kinds of vertices in the dependency graph.

    The set is fixed; node ids are namespaced by this value
    (``"<type>:<raw id>"``) so ids never collide across kinds.
    """

    CABLE = "cable"
    PIPELINE = "pipeline"
    PORT = "port"
    CHOKEPOINT = "chokepoint"
    COUNTRY = "country"

    def node_id(self, raw_id: str) -> str:
        """Build the namespaced graph id for a raw dataset id."""
        return f"{self.value}:{raw_id}"


class EdgeType(str, Enum):
    """Directed relation kinds between infrastructure and countries."""

    SERVES = "serves"
    LANDS_AT = "lands_at"


class ImpactLevel(str, Enum):
    """
    Categorized severity of the impact reaching a node.

    Ordered by ``rank``: critical is the most severe (rank 0),
    low the least (rank 3).
    """

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _IMPACT_RANK[self]


_IMPACT_RANK = {
    ImpactLevel.CRITICAL: 0,
    ImpactLevel.HIGH: 1,
    ImpactLevel.MEDIUM: 2,
    ImpactLevel.LOW: 3,
}
