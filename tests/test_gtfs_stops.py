import io

import pytest

from mimirsbrunn.gtfs_stops import (
    GtfsStop,
    InvalidStop,
    InvisibleStop,
    NotStopArea,
    StopConversionError,
    load_stops,
)
from mimirsbrunn.models import Coord

STOPS_TXT = """stop_id,stop_lat,stop_lon,stop_name,location_type,visible,parent_station
SA:main_station,48.5,2.6,Main,1,,
SP:1,48.5,2.6,Main p1,0,,SA:main_station
SP:2,48.5,2.6,Main p2,,,SA:main_station
SA:weight_3_station,48.6,2.7,weight three,1,1,
SP:3,48.6,2.7,w1,0,,SA:weight_3_station
SP:4,48.6,2.7,w2,0,,SA:weight_3_station
SP:5,48.6,2.7,w3,0,,SA:weight_3_station
SA:hidden,48.5,2.6,Hidden,1,0,
SA:bad,95,2.6,Bad,1,,
SP:orphan,48.5,2.6,orphan,0,,
SP:entrance,48.5,2.6,entrance,2,,SA:main_station
SA:broken,notafloat,2.6,Broken,1,,
"""


def make_stop(**overrides):
    values = dict(
        stop_id="SA:x",
        stop_lat=48.0,
        stop_lon=2.0,
        stop_name="X",
        location_type=1,
        visible=None,
        parent_station=None,
    )
    values.update(overrides)
    return GtfsStop(**values)


def test_load_stops():
    stops, nb_stop_points = load_stops(io.StringIO(STOPS_TXT))
    ids = sorted(s.id for s in stops)
    assert ids == ["stop_area:SA:main_station", "stop_area:SA:weight_3_station"]
    assert nb_stop_points == {
        "stop_area:SA:main_station": 2,
        "stop_area:SA:weight_3_station": 3,
    }


def test_from_row_empty_optionals_are_none():
    stop = GtfsStop.from_row(
        {
            "stop_id": "SA:1",
            "stop_lat": "48.5",
            "stop_lon": "2.5",
            "stop_name": "One",
            "location_type": "",
            "visible": "",
            "parent_station": "",
        }
    )
    assert stop.location_type is None
    assert stop.visible is None
    assert stop.parent_station is None
    assert stop.stop_lat == 48.5


def test_from_row_missing_optional_columns():
    stop = GtfsStop.from_row(
        {"stop_id": "SA:1", "stop_lat": "1", "stop_lon": "2", "stop_name": "One"}
    )
    assert stop.location_type is None
    assert stop.parent_station is None


def test_from_row_missing_required_column():
    with pytest.raises(ValueError):
        GtfsStop.from_row({"stop_id": "SA:1", "stop_lat": "1", "stop_name": "One"})


def test_to_stop():
    stop = make_stop(stop_name="Gare").to_stop()
    assert stop.id == "stop_area:SA:x"
    assert stop.name == "Gare"
    assert stop.label == "Gare"
    assert stop.coord == Coord(2.0, 48.0)
    assert stop.approx_coord == stop.coord


@pytest.mark.parametrize("location_type", [0, 2, None])
def test_not_stop_area(location_type):
    with pytest.raises(NotStopArea):
        make_stop(location_type=location_type).to_stop()


def test_invisible_stop():
    with pytest.raises(InvisibleStop):
        make_stop(visible=0).to_stop()


@pytest.mark.parametrize(
    "lat,lon", [(90.0, 2.0), (-90.0, 2.0), (48.0, 180.0), (48.0, -180.0)]
)
def test_invalid_coordinates(lat, lon):
    with pytest.raises(InvalidStop) as info:
        make_stop(stop_lat=lat, stop_lon=lon).to_stop()
    assert str(info.value).startswith("Invalid lon")
    assert isinstance(info.value, StopConversionError)


def test_to_stop_with_warn_returns_none_on_errors():
    assert make_stop(visible=0).to_stop_with_warn() is None
    assert make_stop(location_type=0).to_stop_with_warn() is None
    assert make_stop(stop_lat=100.0).to_stop_with_warn() is None
    assert make_stop().to_stop_with_warn().id == "stop_area:SA:x"


def test_incr_stop_point():
    counts = {}
    make_stop(location_type=0, parent_station="SA:p").incr_stop_point(counts)
    make_stop(location_type=None, parent_station="SA:p").incr_stop_point(counts)
    make_stop(location_type=1, parent_station="SA:p").incr_stop_point(counts)
    make_stop(location_type=0, parent_station=None).incr_stop_point(counts)
    assert counts == {"stop_area:SA:p": 2}