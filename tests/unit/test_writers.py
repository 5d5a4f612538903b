"""Unit tests for route export writers."""

import json
import xml.etree.ElementTree as ET
from datetime import datetime, timezone

import pytest

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from photo_geo.exceptions import FileWriteError, UnsupportedFormatError
from photo_geo.geo.route import build_sequential
from photo_geo.models.geo_point import GeoPoint
from photo_geo.output import GeoJSONWriter, GPXWriter, KMLWriter, get_writer


GPX = "{http://www.topografix.com/GPX/1/1}"
KML = "{http://www.opengis.net/kml/2.2}"
EXPORT_TIME = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


@pytest.fixture
def items(make_item):
    return [
        make_item(1, GeoPoint(lat=55.7558, lon=37.6173), name="Red Square <1>.jpg"),
        make_item(2, name="no_gps.jpg"),
        make_item(3, GeoPoint(lat=59.9343, lon=30.3351), name="Hermitage.jpg"),
    ]


class TestGPXWriter:
    """Tests for GPX export."""

    def test_structure(self, items):
        root = ET.fromstring(GPXWriter().to_string(items, "trip", EXPORT_TIME))

        assert root.tag == f"{GPX}gpx"
        assert root.get("version") == "1.1"
        assert root.find(f"{GPX}metadata/{GPX}name").text == "trip"
        assert root.find(f"{GPX}metadata/{GPX}time").text == "2024-05-01T12:30:00Z"

        trkpts = root.findall(f"{GPX}trk/{GPX}trkseg/{GPX}trkpt")
        assert [(p.get("lat"), p.get("lon")) for p in trkpts] == [
            ("55.755800", "37.617300"),
            ("59.934300", "30.335100"),
        ]
        assert trkpts[0].find(f"{GPX}name").text == "Red Square <1>.jpg"

        waypoints = root.findall(f"{GPX}wpt")
        assert len(waypoints) == 2

    def test_waypoints_before_track(self, items):
        root = ET.fromstring(GPXWriter().to_string(items))
        tags = [child.tag for child in root]
        assert tags.index(f"{GPX}wpt") < tags.index(f"{GPX}trk")

    def test_without_metadata(self, items):
        root = ET.fromstring(GPXWriter(include_metadata=False).to_string(items))
        assert root.find(f"{GPX}trk/{GPX}trkseg/{GPX}trkpt/{GPX}time") is None


class TestKMLWriter:
    """Tests for KML export."""

    def test_structure(self, items):
        root = ET.fromstring(KMLWriter().to_string(items, "trip"))
        placemarks = root.findall(f"{KML}Document/{KML}Placemark")

        # Route line first, then one placemark per located item
        assert len(placemarks) == 3
        line = placemarks[0].find(f"{KML}LineString/{KML}coordinates").text
        assert line == "37.617300,55.755800,0 30.335100,59.934300,0"

        point = placemarks[1].find(f"{KML}Point/{KML}coordinates").text
        assert point == "37.617300,55.755800,0"
        data = placemarks[1].find(f"{KML}ExtendedData/{KML}Data")
        assert data.get("name") == "id"
        assert data.find(f"{KML}value").text == "1"

    def test_single_point_has_no_line(self, items):
        root = ET.fromstring(KMLWriter().to_string(items[:1]))
        assert root.find(f".//{KML}LineString") is None
        assert len(root.findall(f"{KML}Document/{KML}Placemark")) == 1

    def test_without_metadata(self, items):
        root = ET.fromstring(KMLWriter(include_metadata=False).to_string(items))
        assert root.find(f".//{KML}ExtendedData") is None


class TestGeoJSONWriter:
    """Tests for GeoJSON export."""

    def test_structure(self, items):
        data = json.loads(GeoJSONWriter().to_string(items, "trip", EXPORT_TIME))

        assert data["type"] == "FeatureCollection"
        points, route = data["features"][:-1], data["features"][-1]

        assert [f["geometry"]["coordinates"] for f in points] == [
            [37.6173, 55.7558],
            [30.3351, 59.9343],
        ]
        assert points[0]["properties"]["id"] == 1
        assert points[0]["properties"]["name"] == "Red Square <1>.jpg"
        assert points[0]["properties"]["timestamp"] == "2024-05-01T12:30:00Z"

        assert route["geometry"]["type"] == "LineString"
        assert route["properties"]["type"] == "route"
        assert route["geometry"]["coordinates"] == [[37.6173, 55.7558], [30.3351, 59.9343]]

    def test_accepts_route(self, items):
        data = GeoJSONWriter(include_metadata=False).to_dict(build_sequential(items))
        assert "timestamp" not in data["features"][0]["properties"]
        assert len(data["features"]) == 3


class TestWriterFiles:
    """Tests for file output and writer lookup."""

    @pytest.mark.parametrize("name,writer_class", [
        ("gpx", GPXWriter),
        ("KML", KMLWriter),
        ("geojson", GeoJSONWriter),
    ])
    def test_get_writer(self, name, writer_class):
        assert isinstance(get_writer(name), writer_class)

    def test_get_writer_unknown(self):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            get_writer("shp")
        assert exc_info.value.supported_formats == ["geojson", "gpx", "kml"]

    def test_write_file(self, items, tmp_path):
        path = GPXWriter().write(items, tmp_path / "trip.gpx")

        root = ET.parse(path).getroot()
        assert root.find(f"{GPX}metadata/{GPX}name").text == "trip"

    def test_write_failure(self, items, tmp_path):
        with pytest.raises(FileWriteError):
            KMLWriter().write(items, tmp_path / "missing_dir" / "trip.kml")
