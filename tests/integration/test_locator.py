"""Integration tests for the locating pipeline."""

import io
import json

import pytest
from pathlib import Path

import sys

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from photo_geo.config import GeoSettings
from photo_geo.exceptions import EmptyInputError, JSONParseError
from photo_geo.geo import build_route, find_duplicates, find_nearby
from photo_geo.identity import IdAllocator
from photo_geo.logging import configure_logging
from photo_geo.locator import (
    PhotoInput,
    PhotoLocator,
    SourceRegistry,
    create_default_registry,
    resolve_ocr,
)
from photo_geo.models.enums import LocationSource, RouteStrategy


@pytest.fixture
def locator():
    """Create locator instance."""
    with PhotoLocator(settings=GeoSettings()) as instance:
        yield instance


class TestLocate:
    """Tests for locating single photos."""

    def test_exif_source(self, locator, gps_tags):
        item = locator.locate("IMG_1.jpg", exif_tags=gps_tags)

        assert item.has_coordinates
        assert item.source is LocationSource.EXIF
        assert item.rule == "exif_gps"
        assert item.lat == pytest.approx(55.7558, abs=1e-4)
        assert item.warnings == []

    def test_ocr_source(self, locator, google_ocr_payload):
        item = locator.locate("IMG_2.jpg", ocr_payload=google_ocr_payload)

        assert item.source is LocationSource.OCR
        assert item.rule == "labelled"
        assert item.point.as_tuple() == (55.7558, 37.6173)

    def test_exif_preferred_over_ocr(self, locator, gps_tags):
        item = locator.locate(
            "IMG_3.jpg", exif_tags=gps_tags, ocr_payload="59.9343, 30.3351"
        )
        assert item.source is LocationSource.EXIF

    def test_ocr_used_when_exif_has_no_gps(self, locator):
        item = locator.locate(
            "IMG_4.jpg", exif_tags={"Make": "Canon"}, ocr_payload="59.9343, 30.3351"
        )
        assert item.source is LocationSource.OCR

    def test_nothing_found(self, locator):
        item = locator.locate("IMG_5.jpg", ocr_payload="random text with no numbers")

        assert not item.has_coordinates
        assert item.source is None
        assert item.rule is None

    def test_missing_image_raises(self, locator, tmp_path):
        with pytest.raises(FileNotFoundError):
            locator.locate("gone.jpg", image_path=tmp_path / "gone.jpg")

    def test_low_confidence_warning(self, locator):
        item = locator.locate("IMG_6.jpg", ocr_payload="IMG 37.6173 55.7558")

        assert item.has_coordinates
        assert item.rule == "bare_numbers"
        assert len(item.warnings) == 1
        assert item.warnings[0].startswith("CRITICAL")

    def test_low_confidence_threshold_from_settings(self):
        with PhotoLocator(settings=GeoSettings(low_confidence_threshold=0.3)) as locator:
            item = locator.locate("IMG_7.jpg", ocr_payload="IMG 37.6173 55.7558")
        assert item.warnings == []

    def test_ids_increase(self, locator):
        first = locator.locate("a.jpg")
        second = locator.locate_manual("b", "55.7558, 37.6173")
        assert second.id == first.id + 1

    def test_shared_allocator(self):
        ids = IdAllocator(start=10)
        with PhotoLocator(settings=GeoSettings(), id_allocator=ids) as one, \
                PhotoLocator(settings=GeoSettings(), id_allocator=ids) as two:
            assert one.locate("a.jpg").id == 10
            assert two.locate("b.jpg").id == 11


class TestLocateManual:
    """Tests for manual coordinate entry."""

    def test_dms_entry(self, locator):
        item = locator.locate_manual("Summit", "55° 7' 24.4416\" N, 37° 7' 24.4416\" W")

        assert item.source is LocationSource.MANUAL
        assert item.lat == pytest.approx(55.123456, abs=1e-4)
        assert item.lon == pytest.approx(-37.123456, abs=1e-4)
        assert item.confidence == 1.0

    def test_unrecognized_entry(self, locator):
        item = locator.locate_manual("Nowhere", "somewhere nice")
        assert not item.has_coordinates
        assert item.source is None


class TestOcrFiles:
    """Tests for reading saved OCR results."""

    def test_json_file(self, locator, tmp_path, google_ocr_payload):
        path = tmp_path / "IMG_2041.json"
        path.write_text(json.dumps(google_ocr_payload, ensure_ascii=False), encoding="utf-8")

        item = locator.locate_ocr_file(path)

        assert item.name == "IMG_2041.json"
        assert item.source is LocationSource.OCR

    def test_txt_file(self, locator, tmp_path):
        path = tmp_path / "note.txt"
        path.write_text("GPS 55.7558 N 37.6173 E", encoding="utf-8")

        item = locator.locate_ocr_file(path)

        assert item.rule == "hemisphere"

    def test_empty_file(self, locator, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("  \n", encoding="utf-8")
        with pytest.raises(EmptyInputError):
            locator.locate_ocr_file(path)

    def test_invalid_json(self, locator, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(JSONParseError):
            locator.locate_ocr_file(path)

    def test_missing_file(self, locator, tmp_path):
        with pytest.raises(FileNotFoundError):
            locator.locate_ocr_file(tmp_path / "missing.json")


class TestRegistry:
    """Tests for the source registry."""

    def test_default_order(self):
        registry = create_default_registry()
        assert [config.name for config in registry.get_all()] == ["exif", "ocr"]
        assert len(registry) == 2
        assert "exif" in registry

    def test_unregister(self):
        registry = create_default_registry()
        assert registry.unregister("exif") is True
        assert registry.unregister("exif") is False
        assert registry.get("exif") is None

    def test_ocr_only_registry(self, gps_tags):
        registry = SourceRegistry().register("ocr", LocationSource.OCR, resolve_ocr)
        with PhotoLocator(settings=GeoSettings(), registry=registry) as locator:
            item = locator.locate("a.jpg", exif_tags=gps_tags, ocr_payload="59.9343, 30.3351")
        assert item.source is LocationSource.OCR
        assert item.lat == 59.9343


class TestBatches:
    """Tests for sequential and concurrent batches."""

    @pytest.fixture
    def photos(self, gps_tags, google_ocr_payload, tmp_path):
        return [
            PhotoInput(name="exif.jpg", exif_tags=gps_tags),
            PhotoInput(name="ocr.jpg", ocr_payload=google_ocr_payload),
            PhotoInput(name="missing.jpg", image_path=tmp_path / "missing.jpg"),
            PhotoInput(name="blank.jpg", ocr_payload="nothing"),
            PhotoInput(name="far.jpg", ocr_payload="59.9343, 30.3351"),
        ]

    def test_locate_batch(self, locator, photos):
        items = locator.locate_batch(photos)

        assert [item.id for item in items] == [1, 2, 3, 4, 5]
        assert [item.name for item in items] == [p.name for p in photos]
        assert [item.has_coordinates for item in items] == [True, True, False, False, True]
        assert items[2].warnings[0].startswith("Locate error")

    def test_batch_summary_logged(self, locator, photos):
        stream = io.StringIO()
        configure_logging(log_level="INFO", log_format="json", stream=stream)

        locator.locate_batch(photos + [PhotoInput(name="bare.jpg", ocr_payload="IMG 37.6173 55.7558")])

        entries = [json.loads(line) for line in stream.getvalue().splitlines() if line.strip()]
        summary = next(e for e in entries if e["event"] == "batch_summary")
        assert summary["total"] == 6
        assert summary["located"] == 4
        assert summary["unlocated"] == 2
        assert summary["min_confidence"] == 0.4
        assert summary["low_confidence_count"] == 1

    @pytest.mark.asyncio
    async def test_locate_batch_async_matches_sequential(self, photos):
        with PhotoLocator(settings=GeoSettings(batch_size=2)) as async_locator:
            async_items = await async_locator.locate_batch_async(photos)
        with PhotoLocator(settings=GeoSettings()) as sequential_locator:
            sequential_items = sequential_locator.locate_batch(photos)

        assert [item.id for item in async_items] == [1, 2, 3, 4, 5]
        assert [i.point for i in async_items] == [i.point for i in sequential_items]
        assert [i.source for i in async_items] == [i.source for i in sequential_items]

    @pytest.mark.asyncio
    async def test_locate_async(self, locator, gps_tags):
        item = await locator.locate_async(PhotoInput(name="a.jpg", exif_tags=gps_tags))
        assert item.source is LocationSource.EXIF

    @pytest.mark.asyncio
    async def test_empty_batch(self, locator):
        assert await locator.locate_batch_async([]) == []


class TestPipeline:
    """End-to-end: locate photos, then group, search and route."""

    def test_full_pipeline(self, locator):
        items = [
            locator.locate_manual("a", "55.755800, 37.617300"),
            locator.locate_manual("b", "55.755830, 37.617300"),
            locator.locate_manual("c", "55.760000, 37.617300"),
            locator.locate_manual("d", "59.9343, 30.3351"),
            locator.locate_manual("e", "unknown"),
        ]

        groups = find_duplicates(items)
        assert [group.ids for group in groups] == [[1, 2]]

        nearby = find_nearby(items, items[0], radius_km=1.0)
        assert [item.id for item in nearby] == [2, 3]

        route = build_route(items, RouteStrategy.NEAREST, start=items[3])
        assert route.ids[0] == 4
        assert len(route) == 4
