"""
JSON file adapter for reference datasets.

Reads one JSON document per dataset from a directory:

    cables.json         list of UnderseaCable records
    pipelines.json      list of Pipeline records
    ports.json          list of Port records
    waterways.json      list of Waterway records
    country_names.json  object mapping country code to display name
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from infracascade.models.reference import ReferenceData

from .base_adapter import BaseReferenceAdapter, ReferenceDataError

DATASET_FILES = {
    "cables": "cables.json",
    "pipelines": "pipelines.json",
    "ports": "ports.json",
    "waterways": "waterways.json",
    "country_names": "country_names.json",
}


class JsonReferenceAdapter(BaseReferenceAdapter):
    """
    Loads reference datasets from JSON files in a directory.

    Attributes:
        data_dir: Directory containing the dataset files

    Example:
        >>> adapter = JsonReferenceAdapter(Path("./data"))
        >>> data = adapter.load()
        >>> print(len(data.cables))
    """

    def __init__(self, data_dir: Path):
        super().__init__(source_name="json")
        self.data_dir = Path(data_dir)

    def load(self) -> ReferenceData:
        raw = {key: self._read(filename) for key, filename in DATASET_FILES.items()}

        try:
            data = ReferenceData.model_validate(raw)
        except ValidationError as e:
            self.logger.error(
                "reference_data_invalid",
                data_dir=str(self.data_dir),
                error_count=e.error_count(),
            )
            raise ReferenceDataError(
                f"Reference data in {self.data_dir} failed validation: {e}"
            ) from e

        self._log_loaded(data)
        return data

    def _read(self, filename: str) -> Any:
        path = self.data_dir / filename
        if not path.is_file():
            raise ReferenceDataError(f"Reference dataset not found: {path}")
        try:
            with path.open(encoding="utf-8") as fh:
                return json.load(fh)
        except json.JSONDecodeError as e:
            raise ReferenceDataError(f"Reference dataset {path} is not valid JSON: {e}") from e
