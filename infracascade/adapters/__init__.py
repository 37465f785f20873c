"""
Reference dataset adapters.

Adapters expose the static infrastructure datasets (cables, pipelines, ports,
waterways, country names) as a validated ReferenceData bundle.
"""

from functools import lru_cache

from infracascade.config import get_settings
from infracascade.models.reference import ReferenceData

from .base_adapter import BaseReferenceAdapter, InMemoryReferenceAdapter, ReferenceDataError
from .json_adapter import JsonReferenceAdapter


@lru_cache
def get_reference_data() -> ReferenceData:
    """
    Get the cached reference data bundle (singleton).

    Loads from the configured data directory, or the bundled sample
    datasets when none is configured.
    """
    settings = get_settings()
    return JsonReferenceAdapter(settings.resolved_data_dir).load()


__all__ = [
    "BaseReferenceAdapter",
    "InMemoryReferenceAdapter",
    "JsonReferenceAdapter",
    "ReferenceDataError",
    "get_reference_data",
]
