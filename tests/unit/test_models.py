"""Unit tests for data models."""

import math

import pytest
from pydantic import ValidationError

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from photo_geo.exceptions import InvalidCoordinateError
from photo_geo.models import (
    CoordinateFormat,
    DuplicateGroup,
    GeoPoint,
    LocatedItem,
    LocationSource,
    ProviderResult,
    Route,
    RouteSegment,
    RouteStrategy,
    TravelMode,
    with_coordinates,
)
from photo_geo.models.ocr_input import is_array, is_mapping, iter_children


class TestGeoPoint:
    """Tests for the GeoPoint value object."""

    def test_present_point(self):
        point = GeoPoint(lat=55.7558, lon=37.6173)
        assert point.is_present
        assert point.as_tuple() == (55.7558, 37.6173)
        assert point.as_lon_lat() == (37.6173, 55.7558)
        assert bool(point)

    def test_absent_point(self):
        point = GeoPoint.absent()
        assert not point.is_present
        assert point.as_tuple() is None
        assert point.as_lon_lat() is None
        assert not point
        assert point == GeoPoint()

    def test_absent_is_shared(self):
        assert GeoPoint.absent() is GeoPoint.absent()

    @pytest.mark.parametrize("lat,lon", [
        (90.0, 180.0),
        (-90.0, -180.0),
        (0.0, 0.0),
    ])
    def test_range_boundaries_accepted(self, lat, lon):
        assert GeoPoint(lat=lat, lon=lon).is_present

    @pytest.mark.parametrize("lat,lon", [
        (90.0001, 0.0),
        (-95.0, 0.0),
        (0.0, 180.5),
        (0.0, -181.0),
        (math.nan, 0.0),
    ])
    def test_out_of_range_rejected(self, lat, lon):
        with pytest.raises(ValidationError):
            GeoPoint(lat=lat, lon=lon)

    def test_half_present_rejected(self):
        with pytest.raises(ValidationError):
            GeoPoint(lat=55.0)

    def test_of_raises_domain_error(self):
        with pytest.raises(InvalidCoordinateError) as exc_info:
            GeoPoint.of(95.0, 37.0)
        assert exc_info.value.lat == 95.0

    def test_try_of(self):
        assert GeoPoint.try_of(55.0, 37.0) == GeoPoint(lat=55.0, lon=37.0)
        assert not GeoPoint.try_of(95.0, 37.0).is_present
        assert not GeoPoint.try_of(None, 37.0).is_present

    @pytest.mark.parametrize(
        "lat,lon,expected",
        [
            ("55.7", "37.6", (55.7, 37.6)),
            ("north", 37.6, None),
            ([55.7], 37.6, None),
            ({"deg": 55}, 37.6, None),
            ("nan", 37.6, None),
        ],
    )
    def test_try_of_loose_values(self, lat, lon, expected):
        assert GeoPoint.try_of(lat, lon).as_tuple() == expected

    def test_frozen(self):
        point = GeoPoint(lat=1.0, lon=2.0)
        with pytest.raises(ValidationError):
            point.lat = 3.0

    def test_repr(self):
        assert repr(GeoPoint.absent()) == "GeoPoint(absent)"
        assert repr(GeoPoint(lat=1.5, lon=2.5)) == "GeoPoint(1.5, 2.5)"


class TestLocatedItem:
    """Tests for LocatedItem."""

    def test_defaults(self):
        item = LocatedItem(id=1, name="a.jpg")
        assert not item.has_coordinates
        assert item.lat is None
        assert item.distance is None
        assert item.is_very_close is False
        assert item.nearby_objects_count is None
        assert item.warnings == []

    def test_coordinate_properties(self):
        item = LocatedItem(id=1, name="a.jpg", point=GeoPoint(lat=10.0, lon=20.0))
        assert item.has_coordinates
        assert item.lat == 10.0
        assert item.lon == 20.0

    def test_relocate_clears_annotations(self):
        item = LocatedItem(
            id=1,
            name="a.jpg",
            point=GeoPoint(lat=10.0, lon=20.0),
            source=LocationSource.OCR,
            distance=0.5,
            is_very_close=True,
            nearby_objects_count=3,
            rule="bare_numbers",
            confidence=0.4,
            warnings=["low confidence"],
        )

        moved = item.relocate(GeoPoint(lat=11.0, lon=21.0))

        assert moved.id == 1
        assert moved.point == GeoPoint(lat=11.0, lon=21.0)
        assert moved.source == LocationSource.MANUAL
        assert moved.distance is None
        assert moved.is_very_close is False
        assert moved.nearby_objects_count is None
        assert moved.warnings == []
        # Original untouched
        assert item.lat == 10.0

    def test_relocate_to_absent(self):
        item = LocatedItem(id=1, name="a.jpg", point=GeoPoint(lat=10.0, lon=20.0))
        moved = item.relocate(GeoPoint.absent())
        assert not moved.has_coordinates
        assert moved.source is None

    def test_to_flat_dict(self):
        item = LocatedItem(
            id=4, name="b.jpg", point=GeoPoint(lat=1.0, lon=2.0),
            source=LocationSource.EXIF, warnings=["w1", "w2"],
        )
        flat = item.to_flat_dict()
        assert flat["id"] == 4
        assert flat["lat"] == 1.0
        assert flat["lon"] == 2.0
        assert flat["source"] == "exif"
        assert flat["warnings"] == "w1; w2"

    def test_with_coordinates_preserves_order(self):
        items = [
            LocatedItem(id=1, name="a", point=GeoPoint(lat=1.0, lon=1.0)),
            LocatedItem(id=2, name="b"),
            LocatedItem(id=3, name="c", point=GeoPoint(lat=2.0, lon=2.0)),
        ]
        assert [i.id for i in with_coordinates(items)] == [1, 3]


class TestRouteModels:
    """Tests for Route, RouteSegment and DuplicateGroup."""

    def _items(self):
        return [
            LocatedItem(id=i, name=f"{i}.jpg", point=GeoPoint(lat=float(i), lon=0.0))
            for i in (1, 2, 3)
        ]

    def test_route_totals(self):
        a, b, c = self._items()
        route = Route(
            strategy=RouteStrategy.SEQUENTIAL,
            points=[a, b, c],
            segments=[
                RouteSegment(start=a, end=b, distance_m=1500.0),
                RouteSegment(start=b, end=c, distance_m=500.0),
            ],
        )
        assert route.total_distance_m == 2000.0
        assert route.total_distance_km == 2.0
        assert route.ids == [1, 2, 3]
        assert len(route) == 3
        assert route.segments[0].distance_km == 1.5

    def test_empty_route(self):
        route = Route(strategy=RouteStrategy.NEAREST)
        assert route.total_distance_m == 0.0
        assert len(route) == 0

    def test_duplicate_group(self):
        a, b, c = self._items()
        b.distance = 0.004
        c.distance = 0.008
        group = DuplicateGroup(members=[a, b, c])
        assert group.base is a
        assert group.others == [b, c]
        assert group.ids == [1, 2, 3]
        assert group.max_distance_km() == 0.008
        assert len(group) == 3

    def test_duplicate_group_needs_two_members(self):
        with pytest.raises(ValidationError):
            DuplicateGroup(members=self._items()[:1])


class TestEnums:
    """Tests for enumerations."""

    @pytest.mark.parametrize("name,expected", [
        ("dms", CoordinateFormat.DMS),
        ("DMS", CoordinateFormat.DMS),
        (" decimal ", CoordinateFormat.DECIMAL),
        ("plus_code", CoordinateFormat.PLUS_CODE),
        ("bogus", None),
    ])
    def test_format_from_name(self, name, expected):
        assert CoordinateFormat.from_name(name) is expected

    def test_parseable_formats(self):
        assert CoordinateFormat.DECIMAL.is_parseable
        assert CoordinateFormat.FORMATTED.is_parseable
        assert not CoordinateFormat.UTM.is_parseable
        assert not CoordinateFormat.MGRS.is_parseable

    @pytest.mark.parametrize("mode,speed", [
        (TravelMode.WALKING, 4.0),
        (TravelMode.RUNNING, 10.0),
        (TravelMode.CYCLING, 15.0),
        (TravelMode.DRIVING, 60.0),
    ])
    def test_travel_speeds(self, mode, speed):
        assert mode.speed_kmh == speed


class TestOCRInput:
    """Tests for OCR payload helpers."""

    def test_provider_result(self, google_ocr_payload):
        result = ProviderResult.from_payload(google_ocr_payload["google"])
        assert result.status == "success"
        assert result.block_texts() == ["Широта:", "55.7558"]

    @pytest.mark.parametrize("payload", [
        None,
        "text",
        ["a", "b"],
        {"bounding_boxes": "not a list"},
        {"bounding_boxes": [{"left": 1}]},
    ])
    def test_provider_result_other_shapes(self, payload):
        assert ProviderResult.from_payload(payload) is None

    def test_shape_helpers(self):
        assert is_mapping({"a": 1})
        assert is_array([1, 2])
        assert is_array((1, 2))
        assert not is_array("ab")
        assert not is_array(b"ab")
        assert list(iter_children({"a": 1, "b": 2})) == [1, 2]
        assert list(iter_children([3, 4])) == [3, 4]
        assert list(iter_children("x")) == []
