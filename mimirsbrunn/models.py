"""Data model for the places indexed by the importers."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional


class ZoneType(enum.Enum):
    """Kind of administrative zone, ordered from the smallest to the largest."""

    SUBURB = "suburb"
    CITY_DISTRICT = "city_district"
    CITY = "city"
    STATE_DISTRICT = "state_district"
    STATE = "state"
    COUNTRY_REGION = "country_region"
    COUNTRY = "country"
    NON_ADMINISTRATIVE = "non_administrative"

    @property
    def rank(self) -> int:
        return list(type(self)).index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ZoneType):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, ZoneType):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, ZoneType):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, ZoneType):
            return NotImplemented
        return self.rank >= other.rank


@dataclass(frozen=True)
class Coord:
    """A WGS84 position."""

    lon: float = 0.0
    lat: float = 0.0


@dataclass
class Admin:
    """An administrative region."""

    id: str = ""
    level: int = 0
    name: str = ""
    label: str = ""
    zip_codes: list[str] = field(default_factory=list)
    weight: float = 0.0
    coord: Coord = field(default_factory=Coord)
    approx_coord: Optional[Coord] = None
    bbox: Optional[tuple[float, float, float, float]] = None
    boundary: Any = None
    insee: str = ""
    zone_type: Optional[ZoneType] = None
    parent_id: Optional[str] = None
    codes: list[tuple[str, str]] = field(default_factory=list)
    names: dict[str, str] = field(default_factory=dict)
    labels: dict[str, str] = field(default_factory=dict)
    country_codes: list[str] = field(default_factory=list)
    administrative_regions: list["Admin"] = field(default_factory=list)
    distance: Optional[int] = None
    context: Any = None

    def is_city(self) -> bool:
        """True when the zone is a city."""
        return self.zone_type is ZoneType.CITY


@dataclass
class Street:
    """A street, with the admins it belongs to."""

    id: str = ""
    name: str = ""
    label: str = ""
    administrative_regions: list[Admin] = field(default_factory=list)
    weight: float = 0.0
    zip_codes: list[str] = field(default_factory=list)
    coord: Coord = field(default_factory=Coord)
    approx_coord: Optional[Coord] = None
    distance: Optional[int] = None
    country_codes: list[str] = field(default_factory=list)
    context: Any = None


@dataclass
class Addr:
    """A postal address: a house number on a street."""

    id: str = ""
    name: str = ""
    label: str = ""
    house_number: str = ""
    street: Street = field(default_factory=Street)
    coord: Coord = field(default_factory=Coord)
    approx_coord: Optional[Coord] = None
    weight: float = 0.0
    zip_codes: list[str] = field(default_factory=list)
    distance: Optional[int] = None
    country_codes: list[str] = field(default_factory=list)
    context: Any = None


@dataclass
class Stop:
    """A public transport stop area."""

    id: str = ""
    label: str = ""
    name: str = ""
    coord: Coord = field(default_factory=Coord)
    approx_coord: Optional[Coord] = None
    administrative_regions: list[Admin] = field(default_factory=list)
    weight: float = 0.0
    zip_codes: list[str] = field(default_factory=list)
    commercial_modes: list[Any] = field(default_factory=list)
    physical_modes: list[Any] = field(default_factory=list)
    lines: list[Any] = field(default_factory=list)
    comments: list[Any] = field(default_factory=list)
    timezone: str = ""
    codes: list[tuple[str, str]] = field(default_factory=list)
    properties: dict[str, str] = field(default_factory=dict)
    feed_publishers: list[Any] = field(default_factory=list)
    country_codes: list[str] = field(default_factory=list)
    distance: Optional[int] = None
    context: Any = None


@dataclass(frozen=True)
class IndexSettings:
    """Sharding settings of a search index."""

    nb_shards: int
    nb_replicas: int


class IndexVisibility(enum.Enum):
    """Whether an index is published under the global aliases."""

    PUBLIC = "public"
    PRIVATE = "private"