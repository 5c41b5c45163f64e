"""Spatial lookup of administrative regions containing a point."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Union

from shapely.geometry import Point, box
from shapely.strtree import STRtree

from mimirsbrunn.models import Admin, Coord

logger = logging.getLogger(__name__)

CoordLike = Union[Coord, tuple[float, float]]


def _xy(coord: CoordLike) -> tuple[float, float]:
    if isinstance(coord, Coord):
        return coord.lon, coord.lat
    x, y = coord
    return float(x), float(y)


def _zone_key(admin: Admin) -> tuple:
    # Admins without zone type come first, then from the smallest zone type.
    return (admin.zone_type is not None, admin.zone_type)


@dataclass
class SplitAdmin:
    """An admin stored apart from its boundary, with a cached envelope."""

    envelope: tuple[float, float, float, float]
    boundary: Any
    admin: Admin

    def envelope_contains(self, point: tuple[float, float]) -> bool:
        minx, miny, maxx, maxy = self.envelope
        x, y = point
        return minx <= x <= maxx and miny <= y <= maxy

    def distance_2(self, point: tuple[float, float]) -> float:
        """Square of the distance from the boundary to the point."""
        d = self.boundary.distance(Point(point[0], point[1]))
        return d * d

    def contains_point(self, point: tuple[float, float]) -> bool:
        """True when the point lies strictly inside the boundary."""
        return bool(self.boundary.contains(Point(point[0], point[1])))


class AdminGeoFinder:
    """Finds admins by location, and by id for their hierarchy."""

    def __init__(self, admins: Iterable[Admin] = ()) -> None:
        self._splits: list[SplitAdmin] = []
        self._tree: STRtree | None = None
        self._admin_by_id: dict[str, Admin] = {}
        for admin in admins:
            self.insert(admin)

    def insert(self, admin: Admin) -> None:
        """Add an admin; admins without a usable boundary are skipped."""
        boundary = admin.boundary
        if boundary is None:
            logger.info(
                "Admin '%s' has no boundary (=> not inserted in the AdminGeoFinder)",
                admin.id,
            )
            return
        if boundary.is_empty:
            logger.warning("Admin '%s' has a boundary but no bounding box", admin.id)
            return
        stored = dataclasses.replace(admin, boundary=None)
        split = SplitAdmin(
            envelope=tuple(boundary.bounds), boundary=boundary, admin=stored
        )
        self._admin_by_id[stored.id] = stored
        self._splits.append(split)
        self._tree = None

    def _candidates(self, point: tuple[float, float]) -> list[SplitAdmin]:
        if not self._splits:
            return []
        if self._tree is None:
            self._tree = STRtree([box(*s.envelope) for s in self._splits])
        indices = sorted(int(i) for i in self._tree.query(Point(*point)))
        return [
            self._splits[i] for i in indices if self._splits[i].envelope_contains(point)
        ]

    def _parents(self, admin: Admin) -> Iterator[Admin]:
        seen = {admin.id}
        parent_id = admin.parent_id
        while parent_id is not None:
            parent = self._admin_by_id.get(parent_id)
            if parent is None or parent.id in seen:
                return
            seen.add(parent.id)
            yield parent
            parent_id = parent.parent_id

    def get_admins_if(
        self, coord: CoordLike, condition: Callable[[Admin], bool]
    ) -> list[list[Admin]]:
        """Admin hierarchies (leaf first) overlapping the point whose leaf
        verifies the condition."""
        point = _xy(coord)
        candidates = [c for c in self._candidates(point) if condition(c.admin)]
        candidates.sort(key=lambda c: _zone_key(c.admin))

        visited_ids: set[str] = set()
        result = []
        geom = Point(*point)
        for cand in candidates:
            if cand.admin.id in visited_ids or not cand.boundary.intersects(geom):
                continue
            hierarchy = [cand.admin]
            for parent in self._parents(cand.admin):
                visited_ids.add(parent.id)
                hierarchy.append(parent)
            result.append(hierarchy)
        return result

    def get(self, coord: CoordLike) -> list[Admin]:
        """All admins containing the point, keeping one admin per zone type."""
        point = _xy(coord)
        candidates = self._candidates(point)
        candidates.sort(key=lambda c: _zone_key(c.admin))

        tested_hierarchy: set[str] = set()
        added_zone_types = set()
        result = []
        geom = Point(*point)

        for candidate in candidates:
            admin = candidate.admin
            if admin.id in tested_hierarchy:
                result.append(admin)
            elif admin.zone_type is not None and admin.zone_type in added_zone_types:
                continue
            elif candidate.boundary.contains(geom):
                if admin.zone_type is not None:
                    added_zone_types.add(admin.zone_type)
                parent_id = admin.parent_id
                while parent_id is not None:
                    parent = self._admin_by_id.get(parent_id)
                    if parent is not None and parent.zone_type is not None:
                        added_zone_types.add(parent.zone_type)
                    if parent_id in tested_hierarchy:
                        break
                    tested_hierarchy.add(parent_id)
                    parent_id = parent.parent_id if parent is not None else None
                result.append(admin)
        return result

    def admins(self) -> Iterator[Admin]:
        """Copies of the stored admins, with their boundary restored."""
        for split in self._splits:
            yield dataclasses.replace(split.admin, boundary=split.boundary)