"""Locating pipeline: turns photos into LocatedItems.

For each photo the registered location sources are tried in order (EXIF GPS
metadata first, then OCR text) and the first one that yields a point wins.
"""

import asyncio
import json
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from .config import GeoSettings, get_settings
from .exceptions import EmptyInputError, GeoException, JSONParseError
from .extractors.base import ExtractionMatch
from .extractors.exif import ExifCoordinateExtractor
from .extractors.text import TextCoordinateExtractor
from .formats.parser import CoordinateParser
from .identity import IdAllocator
from .logging import GeoLogger
from .models.enums import LocationSource
from .models.located_item import LocatedItem
from .models.ocr_input import OCRPayload
from .validators.confidence import ConfidenceValidator


logger = GeoLogger(__name__)


@dataclass
class PhotoInput:
    """Everything known about one uploaded photo."""

    name: str
    image_path: Optional[Union[str, Path]] = None
    exif_tags: Optional[Dict[Any, Any]] = None
    ocr_payload: OCRPayload = None


# =============================================================================
# Source Registry Pattern
# =============================================================================

SourceResolver = Callable[["PhotoLocator", PhotoInput], ExtractionMatch]


@dataclass
class SourceConfig:
    """A registered location source and the resolver that queries it."""
    name: str
    source: LocationSource
    resolver: SourceResolver


class SourceRegistry:
    """
    Ordered registry of location sources.

    Sources are queried in registration order; the first match wins.

    Usage:
        registry = SourceRegistry()
        registry.register("exif", LocationSource.EXIF, resolve_exif)
        registry.register("ocr", LocationSource.OCR, resolve_ocr)
    """

    def __init__(self):
        self._sources: Dict[str, SourceConfig] = {}

    def register(
        self, name: str, source: LocationSource, resolver: SourceResolver
    ) -> "SourceRegistry":
        """Register a source. Returns self for method chaining."""
        self._sources[name] = SourceConfig(name=name, source=source, resolver=resolver)
        return self

    def unregister(self, name: str) -> bool:
        """Remove a source from the registry."""
        if name in self._sources:
            del self._sources[name]
            return True
        return False

    def get(self, name: str) -> Optional[SourceConfig]:
        return self._sources.get(name)

    def get_all(self) -> List[SourceConfig]:
        return list(self._sources.values())

    def __contains__(self, name: str) -> bool:
        return name in self._sources

    def __len__(self) -> int:
        return len(self._sources)


def resolve_exif(locator: "PhotoLocator", photo: PhotoInput) -> ExtractionMatch:
    if photo.exif_tags:
        result = locator.exif_extractor.match(photo.exif_tags)
        if result.found:
            return result
    if photo.image_path is not None:
        return locator.exif_extractor.match_file(photo.image_path)
    return ExtractionMatch.none()


def resolve_ocr(locator: "PhotoLocator", photo: PhotoInput) -> ExtractionMatch:
    if photo.ocr_payload is None:
        return ExtractionMatch.none()
    return locator.text_extractor.match(photo.ocr_payload)


def create_default_registry() -> SourceRegistry:
    """Registry with EXIF first, then OCR."""
    return (
        SourceRegistry()
        .register("exif", LocationSource.EXIF, resolve_exif)
        .register("ocr", LocationSource.OCR, resolve_ocr)
    )


# =============================================================================
# Locator
# =============================================================================

class PhotoLocator:
    """
    Creates LocatedItems from photos, OCR output and manual entry.

    Features:
    - Source registry (EXIF, then OCR) for extensibility
    - Injected IdAllocator so ids stay unique across threads
    - Low-confidence matches are kept but carry a warning
    """

    def __init__(
        self,
        settings: Optional[GeoSettings] = None,
        id_allocator: Optional[IdAllocator] = None,
        registry: Optional[SourceRegistry] = None,
        max_workers: Optional[int] = None,
    ):
        """
        Initialize locator.

        Args:
            settings: Optional GeoSettings instance for Dependency Injection.
            id_allocator: Shared id sequence; a private one is created if omitted.
            registry: Optional SourceRegistry for custom sources.
            max_workers: Maximum number of worker threads for async operations.
        """
        self._settings = settings or get_settings()
        self.ids = id_allocator or IdAllocator()
        self._registry = registry or create_default_registry()

        self.exif_extractor = ExifCoordinateExtractor()
        self.text_extractor = TextCoordinateExtractor(max_depth=self._settings.max_scan_depth)
        low = self._settings.low_confidence_threshold
        self.confidence_validator = ConfidenceValidator(
            low_threshold=low,
            critical_threshold=min(ConfidenceValidator.CRITICAL_THRESHOLD, low),
        )

        self._executor: Optional[ThreadPoolExecutor] = None
        self._max_workers = (
            max_workers if max_workers is not None
            else self._settings.max_workers
        )

    @property
    def settings(self) -> GeoSettings:
        return self._settings

    def _get_executor(self) -> ThreadPoolExecutor:
        """Lazy initialization of thread pool executor."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=self._max_workers)
        return self._executor

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> "PhotoLocator":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __del__(self):
        """Cleanup thread pool on destruction."""
        if getattr(self, "_executor", None) is not None:
            self._executor.shutdown(wait=False)

    # =========================================================================
    # Single items
    # =========================================================================

    def _build_item(
        self, item_id: int, name: str, result: ExtractionMatch, source: Optional[LocationSource]
    ) -> LocatedItem:
        item = LocatedItem(
            id=item_id,
            name=name,
            point=result.point,
            source=source if result.found else None,
            rule=result.rule,
            confidence=result.confidence,
        )
        if result.found:
            warning = self.confidence_validator.get_warning_message(
                result.rule or "unknown", result.confidence
            )
            if warning:
                logger.low_confidence(item=name, rule=result.rule, confidence=result.confidence)
                item.warnings.append(warning)
        return item

    def _locate(self, photo: PhotoInput, item_id: int) -> LocatedItem:
        for config in self._registry.get_all():
            result = config.resolver(self, photo)
            if result.found:
                return self._build_item(item_id, photo.name, result, config.source)
        return self._build_item(item_id, photo.name, ExtractionMatch.none(), None)

    def locate(
        self,
        name: str,
        exif_tags: Optional[Dict[Any, Any]] = None,
        image_path: Optional[Union[str, Path]] = None,
        ocr_payload: OCRPayload = None,
    ) -> LocatedItem:
        """
        Locate one photo.

        Args:
            name: Display name (usually the file name).
            exif_tags: GPS tags already read from the photo.
            image_path: Image file to read EXIF from with Pillow.
            ocr_payload: OCR text or vendor JSON for the photo.

        Returns:
            A LocatedItem; ``has_coordinates`` is False when no source matched.

        Raises:
            FileNotFoundError: If ``image_path`` does not exist.
        """
        photo = PhotoInput(
            name=name, image_path=image_path, exif_tags=exif_tags, ocr_payload=ocr_payload
        )
        return self._locate(photo, self.ids.next_id())

    def locate_photo(self, photo: PhotoInput) -> LocatedItem:
        return self._locate(photo, self.ids.next_id())

    def locate_manual(self, name: str, text: str) -> LocatedItem:
        """
        Create an item from user-entered coordinate text.

        The text is parsed with format detection; unrecognised text yields an
        item without coordinates.
        """
        point = CoordinateParser.parse(text)
        return LocatedItem(
            id=self.ids.next_id(),
            name=name,
            point=point,
            source=LocationSource.MANUAL if point.is_present else None,
            rule="manual" if point.is_present else None,
            confidence=1.0 if point.is_present else 0.0,
        )

    def load_ocr_file(self, filepath: Union[str, Path]) -> OCRPayload:
        """
        Read an OCR result file: JSON, or plain text for ``.txt`` files.

        Raises:
            FileNotFoundError: If file doesn't exist.
            EmptyInputError: If the file is blank.
            JSONParseError: If JSON parsing fails.
        """
        filepath = Path(filepath)
        filepath_str = str(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"OCR file not found: {filepath_str}")

        with open(filepath, "r", encoding="utf-8") as f:
            content = f.read()

        if not content.strip():
            raise EmptyInputError(filepath=filepath_str)
        if filepath.suffix.lower() == ".txt":
            return content

        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise JSONParseError(original_error=str(e), filepath=filepath_str)

    def locate_ocr_file(self, filepath: Union[str, Path]) -> LocatedItem:
        """Locate a photo from its saved OCR result file."""
        payload = self.load_ocr_file(filepath)
        return self.locate(Path(filepath).name, ocr_payload=payload)

    # =========================================================================
    # Batches
    # =========================================================================

    def _locate_or_flag(self, photo: PhotoInput, item_id: int) -> LocatedItem:
        try:
            return self._locate(photo, item_id)
        except (OSError, GeoException) as e:
            logger.error(
                "locate_error", item=photo.name, error=str(e), error_type=type(e).__name__
            )
            return LocatedItem(id=item_id, name=photo.name, warnings=[f"Locate error: {e}"])

    def _log_summary(self, items: List[LocatedItem]) -> None:
        located = [item for item in items if item.has_coordinates]
        confidence = self.confidence_validator.get_summary(
            [item.confidence for item in located]
        )
        logger.batch_summary(
            total=len(items),
            located=len(located),
            unlocated=len(items) - len(located),
            with_warnings=sum(1 for item in items if item.warnings),
            min_confidence=confidence["min"],
            avg_confidence=round(confidence["avg"], 3),
            low_confidence_count=confidence["low_count"],
        )

    def locate_batch(self, photos: List[PhotoInput]) -> List[LocatedItem]:
        """
        Locate photos one after another.

        Failures (unreadable files, bad payloads) do not stop the batch: the
        photo becomes an unlocated item carrying the error as a warning.
        """
        ids = self.ids.reserve(len(photos))
        items = [self._locate_or_flag(photo, item_id) for photo, item_id in zip(photos, ids)]
        self._log_summary(items)
        return items

    async def locate_async(self, photo: PhotoInput) -> LocatedItem:
        """Locate one photo on the worker pool."""
        item_id = self.ids.next_id()
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._get_executor(), self._locate, photo, item_id)

    async def locate_batch_async(
        self, photos: List[PhotoInput], batch_size: Optional[int] = None
    ) -> List[LocatedItem]:
        """
        Locate photos concurrently, ``batch_size`` at a time.

        Ids are allocated in input order before any work starts, so results
        are identical to ``locate_batch`` regardless of completion order.
        """
        size = batch_size or self._settings.batch_size
        ids = self.ids.reserve(len(photos))
        loop = asyncio.get_running_loop()
        executor = self._get_executor()

        items: List[LocatedItem] = []
        for start in range(0, len(photos), size):
            chunk = list(zip(photos[start:start + size], ids[start:start + size]))
            items.extend(await asyncio.gather(*[
                loop.run_in_executor(executor, self._locate_or_flag, photo, item_id)
                for photo, item_id in chunk
            ]))

        self._log_summary(items)
        return items
