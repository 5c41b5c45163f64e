"""Addresses from the French BANO open data files."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal

from mimirsbrunn import labels
from mimirsbrunn.admin_geofinder import AdminGeoFinder
from mimirsbrunn.models import Addr, Admin, Coord, Street, ZoneType

_FIELDS = ("id", "nb", "street", "zip", "city", "src", "lat", "lon")

_ID_CLEANUP = str.maketrans(
    {" ": None, "\t": None, "\r": None, "\n": None, "/": "-", ".": "-", ":": "-", ";": "-"}
)


def _display_float(value: float) -> str:
    """Shortest round-trip text of a float, never in exponent notation and
    without a trailing '.0'."""
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def build_admin_from_bano_city(city: str) -> Admin:
    """A city admin carrying only the name given by BANO."""
    return Admin(name=city, zone_type=ZoneType.CITY)


@dataclass
class Bano:
    """One line of a BANO file."""

    id: str
    nb: str
    street: str
    zip: str
    city: str
    src: str
    lat: float
    lon: float

    @classmethod
    def from_row(cls, row: Sequence[str]) -> "Bano":
        """Build from the fields of a CSV line, in file order."""
        if len(row) != len(_FIELDS):
            raise ValueError(
                f"invalid length {len(row)}, expected {len(_FIELDS)} fields"
            )
        values = dict(zip(_FIELDS, row))
        return cls(
            id=values["id"],
            nb=values["nb"],
            street=values["street"],
            zip=values["zip"],
            city=values["city"],
            src=values["src"],
            lat=float(values["lat"]),
            lon=float(values["lon"]),
        )

    def insee(self) -> str:
        """INSEE code of the city, without leading zeros."""
        if len(self.id) < 5:
            raise ValueError("id must be longer than 5 characters")
        return self.id[:5].lstrip("0")

    def fantoir(self) -> str:
        """FANTOIR code of the street."""
        if len(self.id) < 10:
            raise ValueError("id must be longer than 10 characters")
        return self.id[:10]

    def into_addr(
        self,
        admins_from_insee: Mapping[str, Admin],
        admins_geofinder: AdminGeoFinder,
        use_old_index_format: bool,
    ) -> Addr:
        """Build the indexed address, attached to its admins."""
        street_id = f"street:{self.fantoir()}"
        coord = Coord(self.lon, self.lat)
        admins = admins_geofinder.get(coord)

        # The admin matching the INSEE code is the right one: it replaces
        # every admin of its level found by the geofinder.
        insee_admin = admins_from_insee.get(self.insee())
        if insee_admin is not None:
            admins = [a for a in admins if a.level != insee_admin.level]
            admins.append(insee_admin)

        country_codes = ["fr"]

        # BANO's own city is always offered for the labels.
        city = build_admin_from_bano_city(self.city)
        zones_for_labels = [a for a in admins if a.is_city()] + [city]

        street_label = labels.format_street_label(
            self.street, zones_for_labels, country_codes
        )
        addr_name, addr_label = labels.format_addr_name_and_label(
            self.nb, self.street, zones_for_labels, country_codes
        )

        weight = next((a.weight for a in admins if a.level == 8), 0.0)
        zip_codes = self.zip.split(";")

        street = Street(
            id=street_id,
            name=self.street,
            label=street_label,
            administrative_regions=admins,
            weight=weight,
            zip_codes=list(zip_codes),
            coord=coord,
            approx_coord=None,
            country_codes=list(country_codes),
        )

        suffix = "" if use_old_index_format else ":" + self.nb.translate(_ID_CLEANUP)
        addr_id = f"addr:{_display_float(self.lon)};{_display_float(self.lat)}{suffix}"

        return Addr(
            id=addr_id,
            name=addr_name,
            label=addr_label,
            house_number=self.nb,
            street=street,
            coord=coord,
            approx_coord=coord,
            weight=weight,
            zip_codes=zip_codes,
            country_codes=country_codes,
        )