"""
Redundancy Analyzer — Alternative routes for a disrupted cable.

For a cable source, every other cable that serves at least one of the same
countries is a mitigation candidate; its score is the mean capacity share
across the overlapping countries. Candidates are reported in dataset order
and capped (five by default). They are deliberately not sorted by capacity.
"""

import numpy as np
import structlog

from infracascade.models.cascade import RedundancyCandidate
from infracascade.models.enums import NodeType
from infracascade.models.reference import ReferenceData

from ..graph_builder import normalize_country_code

logger = structlog.get_logger()

DEFAULT_MAX_CANDIDATES = 5


class RedundancyAnalyzer:
    """
    Finds alternative cables that overlap a disrupted cable's countries.

    Attributes:
        reference_data: Reference datasets (cables are scanned in order)
        max_candidates: Maximum number of candidates returned

    Example:
        >>> analyzer = RedundancyAnalyzer(reference_data)
        >>> for alt in analyzer.find_redundancies("cable:marea"):
        ...     print(alt.name, round(alt.capacity_share, 2))
    """

    def __init__(
        self,
        reference_data: ReferenceData,
        max_candidates: int = DEFAULT_MAX_CANDIDATES,
    ):
        self.reference_data = reference_data
        self.max_candidates = max_candidates
        self.logger = structlog.get_logger()

    def find_redundancies(self, source_id: str) -> list[RedundancyCandidate]:
        """
        List alternative cables for a cable source.

        Args:
            source_id: Namespaced id of the disrupted node

        Returns:
            Up to ``max_candidates`` candidates in dataset order; empty for
            non-cable sources or unknown cables
        """
        node_type, _, cable_id = source_id.partition(":")
        if node_type != NodeType.CABLE.value:
            return []

        source_cable = self.reference_data.get_cable_by_id(cable_id)
        if source_cable is None:
            self.logger.debug("redundancy_source_cable_not_found", source_id=source_id)
            return []

        source_countries = {
            normalize_country_code(cs.country) for cs in source_cable.countries_served
        }

        candidates = []
        for cable in self.reference_data.cables:
            if cable.id == cable_id:
                continue

            shared = [
                cs.capacity_share for cs in cable.countries_served
                if normalize_country_code(cs.country) in source_countries
            ]
            if shared:
                candidates.append(RedundancyCandidate(
                    id=cable.id,
                    name=cable.name,
                    capacity_share=float(np.mean(shared)),
                ))

        self.logger.debug(
            "redundancies_found",
            source_id=source_id,
            candidate_count=len(candidates),
            returned=min(len(candidates), self.max_candidates),
        )

        return candidates[: self.max_candidates]
