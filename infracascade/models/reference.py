"""
Reference dataset models for the infrastructure cascade engine.

These records mirror the static datasets supplied by the hosting application
(undersea cables, pipelines, ports, strategic waterways and the country-name
table). They are frozen: the engine only ever reads them.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# (longitude, latitude)
Coordinate = tuple[float, float]


class CountryCapacity(BaseModel):
    """
    Share of a cable's capacity attributable to one served country.

    Attributes:
        country: Country code
        capacity_share: Fraction of the cable's capacity serving this country
        is_redundant: Whether alternative routes exist for this country
    """

    model_config = ConfigDict(frozen=True)

    country: str = Field(description="Country code (possibly aliased)")
    capacity_share: float = Field(
        description="Fraction of cable capacity serving this country", ge=0.0, le=1.0
    )
    is_redundant: bool = Field(
        default=False, description="Whether alternative routes exist for this country"
    )


class LandingPoint(BaseModel):
    """A cable landing station."""

    model_config = ConfigDict(frozen=True)

    country: str = Field(description="Country code of the landing station")
    name: Optional[str] = Field(default=None, description="Landing station name")


class UnderseaCable(BaseModel):
    """
    A submarine communications cable.

    Attributes:
        id: Raw dataset id (unique among cables)
        name: Display name
        points: Route geometry as (lon, lat) pairs
        capacity_tbps: Design capacity in Tbps
        rfs_year: Ready-for-service year
        owners: Consortium members
        landing_points: Landing stations
        countries_served: Per-country capacity shares
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    points: list[Coordinate] = Field(default_factory=list)
    capacity_tbps: Optional[float] = Field(default=None, ge=0.0)
    rfs_year: Optional[int] = None
    owners: list[str] = Field(default_factory=list)
    landing_points: list[LandingPoint] = Field(default_factory=list)
    countries_served: list[CountryCapacity] = Field(default_factory=list)


class Pipeline(BaseModel):
    """An oil or gas pipeline."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: str = Field(description="Commodity carried (oil, gas, ...)")
    status: str = Field(default="operating")
    capacity: Optional[str] = None
    operator: Optional[str] = None
    countries: list[str] = Field(
        default_factory=list, description="Traversed countries, possibly aliased"
    )
    points: list[Coordinate] = Field(default_factory=list)


class Port(BaseModel):
    """A major commercial port."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    country: str
    type: str = Field(default="container")
    rank: Optional[int] = None
    lat: float
    lon: float


class Waterway(BaseModel):
    """A strategic maritime chokepoint."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    lat: float
    lon: float
    description: str = ""


class ReferenceData(BaseModel):
    """
    Bundle of every reference dataset the graph is built from.

    Besides carrying the datasets, the bundle answers raw-id lookups for
    detail rendering. Lookups go over the datasets, not the graph, and return
    None when the id is unknown.
    """

    model_config = ConfigDict(frozen=True)

    cables: list[UnderseaCable] = Field(default_factory=list)
    pipelines: list[Pipeline] = Field(default_factory=list)
    ports: list[Port] = Field(default_factory=list)
    waterways: list[Waterway] = Field(default_factory=list)
    country_names: dict[str, str] = Field(default_factory=dict)

    def country_name(self, code: str) -> str:
        """Display name for a country code, falling back to the code itself."""
        return self.country_names.get(code) or code

    def get_cable_by_id(self, cable_id: str) -> Optional[UnderseaCable]:
        return next((c for c in self.cables if c.id == cable_id), None)

    def get_pipeline_by_id(self, pipeline_id: str) -> Optional[Pipeline]:
        return next((p for p in self.pipelines if p.id == pipeline_id), None)

    def get_port_by_id(self, port_id: str) -> Optional[Port]:
        return next((p for p in self.ports if p.id == port_id), None)

    def get_waterway_by_id(self, waterway_id: str) -> Optional[Waterway]:
        return next((w for w in self.waterways if w.id == waterway_id), None)
