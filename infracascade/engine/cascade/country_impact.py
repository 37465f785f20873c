"""
Country Impact Aggregator — Country-level view of a cascade.

Extracts country nodes from the affected set, attaches the capacity each one
loses and orders them most severe first.

Affected capacity:
- cable sources: the served-country capacity share of the disrupted cable
  (0.0 when the country is reached only through a landing point)
- every other source type: fixed 0.1 placeholder, since capacity accounting
  is only modeled for cables
"""

import structlog

from infracascade.models.cascade import CascadeAffectedNode, CountryImpact
from infracascade.models.enums import NodeType
from infracascade.models.reference import ReferenceData

from ..graph_builder import normalize_country_code

logger = structlog.get_logger()

NON_CABLE_AFFECTED_CAPACITY = 0.1


class CountryImpactAggregator:
    """
    Builds the ranked country-impact list for a cascade.

    Attributes:
        reference_data: Reference datasets used for cable capacity shares
    """

    def __init__(self, reference_data: ReferenceData):
        self.reference_data = reference_data
        self.logger = structlog.get_logger()

    def aggregate(
        self,
        source_id: str,
        affected_nodes: list[CascadeAffectedNode],
    ) -> list[CountryImpact]:
        """
        Compute country impacts ordered by severity, then affected capacity.

        Args:
            source_id: Namespaced id of the disrupted node
            affected_nodes: Output of the cascade simulator

        Returns:
            Country impacts, most severe first; ties broken by larger
            affected capacity first
        """
        impacts = []
        for entry in affected_nodes:
            if entry.node.type != NodeType.COUNTRY:
                continue
            code = entry.node.metadata.code
            impacts.append(CountryImpact(
                country=code,
                country_name=entry.node.name,
                impact_level=entry.impact_level,
                affected_capacity=self.affected_capacity(source_id, code),
            ))

        impacts.sort(key=lambda c: (c.impact_level.rank, -c.affected_capacity))

        self.logger.debug(
            "country_impacts_aggregated",
            source_id=source_id,
            country_count=len(impacts),
        )

        return impacts

    def affected_capacity(self, source_id: str, country_code: str) -> float:
        node_type, _, raw_id = source_id.partition(":")
        if node_type != NodeType.CABLE.value:
            return NON_CABLE_AFFECTED_CAPACITY

        cable = self.reference_data.get_cable_by_id(raw_id)
        if cable is None:
            return 0.0

        served = next(
            (
                cs for cs in cable.countries_served
                if normalize_country_code(cs.country) == country_code
            ),
            None,
        )
        return served.capacity_share if served else 0.0
