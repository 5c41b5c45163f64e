"""Building blocks for geocoding imports: data model, admin lookup, labels,
address and stop loading."""

__version__ = "0.1.0"

__all__ = [
    "models",
    "admin_geofinder",
    "labels",
    "addr_reader",
    "bano",
    "gtfs_stops",
]