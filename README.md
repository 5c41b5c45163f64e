# mimirsbrunn

Building blocks for loading geographic data into a geocoding index.

The package is a library. It turns raw address and transit files into
index documents, finds the administrative regions a place belongs to and
formats the labels shown to users. Storing the documents is left to a
backend object that you supply.

## Installation

```
pip install .
pip install ".[test]"   # with pytest, to run the test suite
```

## Modules

### `mimirsbrunn.models`

The data model, as dataclasses and enums:

- `ZoneType` – kind of administrative zone (`SUBURB`, `CITY_DISTRICT`,
  `CITY`, `STATE_DISTRICT`, `STATE`, `COUNTRY_REGION`, `COUNTRY`,
  `NON_ADMINISTRATIVE`). Members compare by size, smallest first.
- `Coord` – a `lon`/`lat` position.
- `Admin` – an administrative region; `Admin.is_city()` tells whether its
  zone type is `ZoneType.CITY`. Its `boundary` is a shapely geometry.
- `Street`, `Addr`, `Stop` – the indexed places.
- `IndexSettings` (`nb_shards`, `nb_replicas`) and `IndexVisibility`
  (`PUBLIC`, `PRIVATE`) – describe the target index.

### `mimirsbrunn.admin_geofinder`

`AdminGeoFinder` is a spatial lookup of administrative regions. Build it
from an iterable of `Admin` objects (or call `insert`); regions without a
boundary, or with an empty one, are skipped.

- `get(coord)` returns the regions containing the point. At most one
  region per zone type is kept (regions without a zone type are all
  kept), smallest zone type first. Once a region is found, its parents
  are trusted without testing their boundaries again.
- `get_admins_if(coord, condition)` returns, for each region that
  overlaps the point and satisfies `condition`, a list holding that
  region followed by its parents.
- `admins()` yields copies of the stored regions with their boundary.

`coord` may be a `Coord` or a `(lon, lat)` tuple.

```python
from shapely.geometry import Polygon
from mimirsbrunn.admin_geofinder import AdminGeoFinder
from mimirsbrunn.models import Admin, Coord, ZoneType

city = Admin(id="admin:city", name="City", zone_type=ZoneType.CITY,
             boundary=Polygon([(0, 0), (10, 0), (10, 10), (0, 10)]))
finder = AdminGeoFinder([city])
[a.id for a in finder.get(Coord(5, 5))]   # ['admin:city']
```

### `mimirsbrunn.labels`

Labels take the form `"{name} ({city})"`, where the city is the first
city among the given admins; without a city the label is the name alone.

- `format_street_label`, `format_poi_label`, `format_stop_label`.
- `format_addr_name_and_label(house_number, street_name, admins,
  country_codes)` returns `(name, label)`. The house number and street
  are ordered as the first country code expects, e.g.
  `"Herengracht 573"` for `nl` and `"20 rue hector malot"` for `fr`.
- `format_international_poi_label(...)` returns a dict of labels per
  language, built from the localised POI and city names, keeping only
  those that differ from the default label.

### `mimirsbrunn.addr_reader`

Streaming import of addresses into an index:

- `import_addresses(rubber, nb_threads, index_settings, dataset,
  addresses, into_addr)` converts each item with `into_addr` (on
  `nb_threads` threads, keeping the input order), skips items that fail
  to convert or have no street name, indexes the rest in a new index,
  publishes it as public and returns the number of indexed addresses.
  A count per country is logged. Backend failures raise
  `AddressImportError`.
- `import_addresses_from_streams(...)` reads CSV text streams; each line
  is passed to `parse_row` as a dict when `has_headers` is true, as a
  list otherwise. Unreadable or unparsable lines are skipped.
- `import_addresses_from_files(...)` opens the given paths, decompressing
  those ending in `.gz`; files that cannot be opened are skipped.

### `mimirsbrunn.bano`

The BANO address format. `Bano.from_row` builds a line from its eight CSV
fields; `insee()` and `fantoir()` extract the codes from the id;
`into_addr(admins_from_insee, admins_geofinder, use_old_index_format)`
builds the `Addr`, replacing the geofinder's admin of the same level by
the one found by INSEE code, and using BANO's own city
(`build_admin_from_bano_city`) for the labels.

```python
from mimirsbrunn.admin_geofinder import AdminGeoFinder
from mimirsbrunn.bano import Bano

bano = Bano.from_row(["751152345C0020", "20", "rue hector malot", "75012",
                      "Paris", "OSM", "48.846", "2.376"])
addr = bano.into_addr({}, AdminGeoFinder(), use_old_index_format=False)
addr.id     # 'addr:2.376;48.846:20'
addr.label  # '20 rue hector malot (Paris)'
```

### `mimirsbrunn.gtfs_stops`

GTFS `stops.txt` reading. `GtfsStop.from_row` parses a line;
`to_stop()` returns a `Stop` or raises `NotStopArea`, `InvisibleStop` or
`InvalidStop` (all `StopConversionError`); `to_stop_with_warn()` returns
`None` instead, logging invalid stops. `load_stops(stream)` returns the
stop areas and, for each `stop_area:<id>`, the number of stop points
attached to it.

## The storage backend

The import functions take a `rubber` object that stands for the index.
It must provide:

- `make_index(dataset, index_settings)` – create a new index and return it;
- `bulk_index(index, documents)` – store an iterator of documents and
  return how many were stored;
- `publish_index(dataset, index, visibility)` – make the index visible.

Any object with these methods works, including an in-memory stand-in.

## What the package does not do

The package ships no client for a search engine, no command-line
importers and no search web service. It provides the conversion and
lookup steps; connecting them to a real index and to command-line
options is up to the caller.