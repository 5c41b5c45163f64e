"""Stop areas read from a GTFS-like stops.txt file."""

from __future__ import annotations

import csv
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import IO, Optional

from mimirsbrunn.models import Coord, Stop

logger = logging.getLogger(__name__)

MAX_LAT = 90.0
MIN_LAT = -90.0
MAX_LON = 180.0
MIN_LON = -180.0


class StopConversionError(Exception):
    """A stops.txt line that does not give an indexable stop area."""


class InvisibleStop(StopConversionError):
    """The stop area is hidden from autocompletion."""


class NotStopArea(StopConversionError):
    """The line is not a stop area."""


class InvalidStop(StopConversionError):
    """One or more attributes have invalid values."""


def _quoted(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _required(row: Mapping[str, Optional[str]], key: str) -> str:
    value = row.get(key)
    if value is None:
        raise ValueError(f"missing field `{key}`")
    return value


def _optional(row: Mapping[str, Optional[str]], key: str) -> Optional[str]:
    value = row.get(key)
    return value if value else None


def _optional_int(row: Mapping[str, Optional[str]], key: str) -> Optional[int]:
    value = _optional(row, key)
    return None if value is None else int(value)


@dataclass
class GtfsStop:
    """One line of stops.txt."""

    stop_id: str
    stop_lat: float
    stop_lon: float
    stop_name: str
    location_type: Optional[int] = None
    visible: Optional[int] = None
    parent_station: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Optional[str]]) -> "GtfsStop":
        """Build from a CSV line keyed by column name; empty optional
        fields are None."""
        return cls(
            stop_id=_required(row, "stop_id"),
            stop_lat=float(_required(row, "stop_lat")),
            stop_lon=float(_required(row, "stop_lon")),
            stop_name=_required(row, "stop_name"),
            location_type=_optional_int(row, "location_type"),
            visible=_optional_int(row, "visible"),
            parent_station=_optional(row, "parent_station"),
        )

    def incr_stop_point(self, nb_stop_points: dict[str, int]) -> None:
        """Count this line as a stop point of its parent stop area."""
        if self.location_type in (0, None) and self.parent_station:
            key = f"stop_area:{self.parent_station}"
            nb_stop_points[key] = nb_stop_points.get(key, 0) + 1

    def to_stop(self) -> Stop:
        """The stop area of this line; raises StopConversionError otherwise."""
        if self.location_type != 1:
            raise NotStopArea(f"{self.stop_id} is not a stop area")
        if self.visible == 0:
            raise InvisibleStop(f"{self.stop_id} is invisible")
        if (
            self.stop_lat <= MIN_LAT
            or self.stop_lat >= MAX_LAT
            or self.stop_lon <= MIN_LON
            or self.stop_lon >= MAX_LON
        ):
            raise InvalidStop(
                f"Invalid lon {self.stop_lon!r} or lat {self.stop_lat!r} "
                f"for stop {_quoted(self.stop_name)}"
            )
        coord = Coord(self.stop_lon, self.stop_lat)
        return Stop(
            id=f"stop_area:{self.stop_id}",
            coord=coord,
            approx_coord=coord,
            label=self.stop_name,
            name=self.stop_name,
        )

    def to_stop_with_warn(self) -> Optional[Stop]:
        """The stop area, or None; invalid stops are logged."""
        try:
            return self.to_stop()
        except InvalidStop as err:
            logger.warning("skip csv line: %s", err)
            return None
        except StopConversionError:
            return None


def load_stops(stream: IO[str]) -> tuple[list[Stop], dict[str, int]]:
    """Read stops.txt: the stop areas and the stop point count of each."""
    nb_stop_points: dict[str, int] = {}
    stops: list[Stop] = []
    for row in csv.DictReader(stream):
        try:
            gtfs_stop = GtfsStop.from_row(row)
        except (ValueError, TypeError) as err:
            logger.warning("skip csv line: %s", err)
            continue
        gtfs_stop.incr_stop_point(nb_stop_points)
        stop = gtfs_stop.to_stop_with_warn()
        if stop is not None:
            stops.append(stop)
    return stops, nb_stop_points