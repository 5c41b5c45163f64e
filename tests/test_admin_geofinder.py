from shapely.geometry import MultiPolygon, Polygon

from mimirsbrunn.admin_geofinder import AdminGeoFinder, SplitAdmin
from mimirsbrunn.models import Admin, Coord, ZoneType


def make_complex_admin(id_, offset, zone_type, zone_size, parent=None):
    s = zone_size
    shape = Polygon(
        [
            (3 * s + offset, 0 * s + offset),
            (6 * s + offset, 0 * s + offset),
            (9 * s + offset, 3 * s + offset),
            (9 * s + offset, 6 * s + offset),
            (6 * s + offset, 9 * s + offset),
            (3 * s + offset, 9 * s + offset),
            (0 * s + offset, 6 * s + offset),
            (0 * s + offset, 3 * s + offset),
            (3 * s + offset, 0 * s + offset),
        ]
    )
    boundary = MultiPolygon([shape])
    coord = Coord(4.0 + offset, 4.0 + offset)
    return Admin(
        id=id_,
        level=8,
        name="city",
        label=f"city {offset}",
        zip_codes=["421337"],
        coord=coord,
        approx_coord=coord,
        bbox=tuple(boundary.bounds),
        boundary=boundary,
        insee="outlook",
        zone_type=zone_type,
        parent_id=parent,
    )


def make_admin(offset, zt):
    return make_complex_admin(f"admin:offset:{offset:g}", offset, zt, 1.0)


def hierarchy_finder():
    finder = AdminGeoFinder()
    finder.insert(make_complex_admin("bob_city", 40.0, ZoneType.CITY, 1.0, "bob_state"))
    finder.insert(
        make_complex_admin("bob_state", 40.0, ZoneType.STATE_DISTRICT, 2.0, "bob_country")
    )
    finder.insert(make_complex_admin("bob_country", 40.0, ZoneType.COUNTRY, 3.0))
    return finder


def test_two_fake_admins():
    finder = AdminGeoFinder()
    finder.insert(make_admin(40.0, ZoneType.CITY))
    finder.insert(make_admin(43.0, ZoneType.STATE))

    for coord in [(48.0, 41.0), (411.0, 41.0), (51.0, 54.0), (53.0, 53.0)]:
        assert finder.get(coord) == []

    admins = finder.get((44.0, 44.0))
    assert [a.id for a in admins] == ["admin:offset:40"]
    admins = finder.get((48.0, 48.0))
    assert [a.id for a in admins] == ["admin:offset:43"]

    admins = sorted(finder.get((46.0, 46.0)), key=lambda a: a.id)
    assert [a.id for a in admins] == ["admin:offset:40", "admin:offset:43"]


def test_two_admin_same_zone_type():
    finder = AdminGeoFinder()
    finder.insert(make_admin(40.0, ZoneType.CITY))
    finder.insert(make_admin(43.0, ZoneType.CITY))
    assert len(finder.get((46.0, 46.0))) == 1


def test_two_no_zone_type():
    finder = AdminGeoFinder()
    finder.insert(make_admin(40.0, None))
    finder.insert(make_admin(43.0, None))
    assert len(finder.get((46.0, 46.0))) == 2


def test_hierarchy():
    finder = hierarchy_finder()
    admins = finder.get((46.0, 46.0))
    assert [a.id for a in admins] == ["bob_city", "bob_state", "bob_country"]


def test_hierarchy_orphan():
    finder = hierarchy_finder()
    finder.insert(
        make_complex_admin("another_state", 40.0, ZoneType.STATE_DISTRICT, 2.0, "bob_country")
    )
    admins = finder.get((46.0, 46.0))
    assert [a.id for a in admins] == ["bob_city", "bob_state", "bob_country"]


def test_hierarchy_and_not_typed_zone():
    finder = hierarchy_finder()
    finder.insert(make_complex_admin("no_typed_zone", 40.0, None, 2.0))
    admins = finder.get((46.0, 46.0))
    assert [a.id for a in admins] == [
        "no_typed_zone",
        "bob_city",
        "bob_state",
        "bob_country",
    ]


def test_get_accepts_coord_object():
    finder = hierarchy_finder()
    assert [a.id for a in finder.get(Coord(46.0, 46.0))] == [
        "bob_city",
        "bob_state",
        "bob_country",
    ]


def test_get_admins_if_returns_hierarchies():
    finder = hierarchy_finder()
    result = finder.get_admins_if((46.0, 46.0), lambda a: True)
    assert [[a.id for a in h] for h in result] == [["bob_city", "bob_state", "bob_country"]]


def test_get_admins_if_with_condition():
    finder = hierarchy_finder()
    result = finder.get_admins_if((46.0, 46.0), lambda a: not a.is_city())
    assert [[a.id for a in h] for h in result] == [["bob_state", "bob_country"]]


def test_get_admins_if_outside():
    finder = hierarchy_finder()
    assert finder.get_admins_if((0.0, 0.0), lambda a: True) == []


def test_admin_without_boundary_is_not_inserted():
    admin = Admin(id="nowhere", zone_type=ZoneType.CITY)
    finder = AdminGeoFinder([admin])
    assert list(finder.admins()) == []


def test_admins_restores_boundary_and_from_iterable():
    source = [make_admin(40.0, ZoneType.CITY), make_admin(43.0, ZoneType.STATE)]
    finder = AdminGeoFinder(source)
    restored = list(finder.admins())
    assert [a.id for a in restored] == [a.id for a in source]
    for original, copy in zip(source, restored):
        assert copy.boundary.equals(original.boundary)
    assert all(a.boundary is None for a in finder.get((46.0, 46.0)))


def test_insert_does_not_modify_given_admin():
    admin = make_admin(40.0, ZoneType.CITY)
    AdminGeoFinder().insert(admin)
    assert admin.boundary is not None
    assert admin.boundary.contains(admin.boundary.centroid)


def test_split_admin_distance_and_contains():
    admin = make_admin(40.0, ZoneType.CITY)
    split = SplitAdmin(
        envelope=tuple(admin.boundary.bounds), boundary=admin.boundary, admin=admin
    )
    assert split.contains_point((44.0, 44.0)) is True
    assert split.distance_2((44.0, 44.0)) == 0.0
    assert split.contains_point((30.0, 44.0)) is False
    # distance from (30, 44) to the left edge at x=40 is 10
    assert abs(split.distance_2((30.0, 44.0)) - 100.0) < 1e-9