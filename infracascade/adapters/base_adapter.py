"""
Base adapter class for reference dataset sources.

This module provides the abstract base class that all reference adapters
inherit from, ensuring every source yields the same validated ReferenceData
bundle regardless of where the datasets live.
"""

from abc import ABC, abstractmethod

import structlog

from infracascade.models.reference import ReferenceData

logger = structlog.get_logger()


class ReferenceDataError(ValueError):
    """Raised when a reference dataset is missing or fails validation."""


class BaseReferenceAdapter(ABC):
    """
    Abstract base class for reference dataset adapters.

    Adapters are read-only views: they load the static cable, pipeline, port,
    waterway and country-name datasets and perform no computation on them.

    Attributes:
        source_name: Identifier for the data source (e.g., "json", "memory")
    """

    def __init__(self, source_name: str):
        """
        Initialize the adapter with a source name.

        Args:
            source_name: Identifier for this data source
        """
        self.source_name = source_name
        self.logger = logger.bind(adapter=source_name)

    @abstractmethod
    def load(self) -> ReferenceData:
        """
        Load every reference dataset into a single bundle.

        Returns:
            Validated ReferenceData bundle

        Raises:
            ReferenceDataError: If a dataset is unavailable or invalid
        """

    def _log_loaded(self, data: ReferenceData) -> None:
        self.logger.info(
            "reference_data_loaded",
            cables=len(data.cables),
            pipelines=len(data.pipelines),
            ports=len(data.ports),
            waterways=len(data.waterways),
            country_names=len(data.country_names),
        )


class InMemoryReferenceAdapter(BaseReferenceAdapter):
    """Adapter over a bundle already held by the host application."""

    def __init__(self, reference_data: ReferenceData):
        super().__init__(source_name="memory")
        self._reference_data = reference_data

    def load(self) -> ReferenceData:
        self._log_loaded(self._reference_data)
        return self._reference_data
