"""Formatting of the names and labels shown for places.

A label is '{nice name} ({city})', where the nice name is, for an address,
its house number and street in the order used in the place's country, and
for every other object simply its name.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Optional

from mimirsbrunn.models import Admin

logger = logging.getLogger(__name__)

# Countries whose short address puts the house number before the road.
_HOUSE_NUMBER_FIRST = frozenset(
    {
        "au",
        "ca",
        "fr",
        "gb",
        "ie",
        "mc",
        "nz",
        "sg",
        "us",
        "za",
    }
)


class AddressFormatError(ValueError):
    """Raised when a short address cannot be built."""


def _find_city(admins: Iterable[Admin]) -> Optional[Admin]:
    return next((admin for admin in admins if admin.is_city()), None)


def _format_label(nice_name: str, admins: Iterable[Admin]) -> str:
    city = _find_city(admins)
    if city is None:
        return nice_name
    return f"{nice_name} ({city.name})"


def _format_i18n_label(nice_name: str, admins: Iterable[Admin], lang: str) -> str:
    city = _find_city(admins)
    if city is None:
        return nice_name
    return f"{nice_name} ({city.names.get(lang, city.name)})"


def _default_name(house_number: str, street: str) -> str:
    # "{street} {hn}" is the most common format, even if not the French one.
    return f"{street} {house_number}"


def _short_addr_label(
    house_number: str, street: str, country_codes: Sequence[str]
) -> str:
    if not street:
        raise AddressFormatError("no road to format")
    # The first country code is taken arbitrarily.
    country_code = country_codes[0].lower() if country_codes else None
    parts = (
        [house_number, street]
        if country_code in _HOUSE_NUMBER_FIRST
        else [street, house_number]
    )
    return " ".join(part for part in parts if part)


def format_street_label(
    name: str, admins: Iterable[Admin], country_codes: Sequence[str]
) -> str:
    """Label of a street."""
    return _format_label(name, admins)


def format_poi_label(
    name: str, admins: Iterable[Admin], country_codes: Sequence[str]
) -> str:
    """Label of a point of interest."""
    return _format_label(name, admins)


def format_stop_label(
    name: str, admins: Iterable[Admin], country_codes: Sequence[str]
) -> str:
    """Label of a public transport stop."""
    return _format_label(name, admins)


def format_addr_name_and_label(
    house_number: str,
    street_name: str,
    admins: Iterable[Admin],
    country_codes: Sequence[str],
) -> tuple[str, str]:
    """Name and label of an address."""
    admins = list(admins)
    try:
        nice_name = _short_addr_label(house_number, street_name, country_codes)
    except AddressFormatError as err:
        logger.warning("impossible to format label: %s", err)
        nice_name = _default_name(house_number, street_name)
    return nice_name, _format_label(nice_name, admins)


def format_international_poi_label(
    poi_names: Mapping[str, str],
    default_poi_name: str,
    default_poi_label: str,
    admins: Iterable[Admin],
    country_codes: Sequence[str],
    langs: Iterable[str],
) -> dict[str, str]:
    """Labels of a point of interest, one per language that differs from
    the default label."""
    admins = list(admins)
    labels: dict[str, str] = {}
    for lang in langs:
        local_name = poi_names.get(lang, default_poi_name)
        label = _format_i18n_label(local_name, admins, lang)
        if label != default_poi_label:
            labels[lang] = label
    return labels