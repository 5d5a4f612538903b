"""Structured logging for photo_geo.

JSON lines by default (one object per event, ready for log shippers) or a
plain console renderer for local use. Library modules log through
``GeoLogger`` and never configure logging themselves; the CLI calls
``configure_logging`` once at startup.

Usage:
    from photo_geo.logging import configure_logging, GeoLogger

    configure_logging(log_level="DEBUG", log_format="text")
    GeoLogger(__name__).route_built(strategy="nearest", points=12, total_m=840.0)
"""

import logging
import sys
from typing import Optional, TextIO

import structlog
from structlog.types import EventDict, Processor


def _service_context(service_name: str, extra_context: Optional[dict]) -> Processor:
    """Processor stamping every event with the service name and static context."""
    extra = dict(extra_context or {})

    def _add(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:  # noqa: ARG001
        event_dict["service"] = service_name
        event_dict.update(extra)
        return event_dict

    return _add


def configure_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    stream: Optional[TextIO] = None,
    service_name: str = "photo-geo",
    extra_context: Optional[dict] = None,
) -> None:
    """Configure structlog and the root stdlib handler.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: 'json' for structured lines, 'text' for console output
        stream: Output stream (default: sys.stderr, so stdout stays clean
            for command results)
        service_name: Value of the ``service`` field on every event
        extra_context: Static fields added to every event
    """
    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _service_context(service_name, extra_context),
    ]
    if log_format == "json":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.reset_defaults()
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Module-level GeoLoggers must pick up later reconfiguration
        cache_logger_on_first_use=False,
    )

    level = getattr(logging, log_level.upper(), logging.INFO)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)


def get_logger(name: str = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance (typically named with __name__)."""
    return structlog.get_logger(name)


class GeoLogger:
    """Domain-specific logger with predefined event methods.

    Expected "nothing found" outcomes are logged at DEBUG so that photos
    without coordinates do not flood production logs.
    """

    def __init__(self, name: str = None):
        self._logger = get_logger(name)

    def coordinates_extracted(
        self,
        source: str,
        rule: str,
        lat: float,
        lon: float,
        **extra
    ) -> None:
        """Log a successful coordinate extraction."""
        self._logger.debug(
            "coordinates_extracted",
            source=source,
            rule=rule,
            lat=lat,
            lon=lon,
            **extra
        )

    def extraction_failed(self, source: str, reason: str, **extra) -> None:
        """Log an extraction that yielded no coordinates."""
        self._logger.debug("extraction_failed", source=source, reason=reason, **extra)

    def parse_failed(self, text: str, reason: str, **extra) -> None:
        self._logger.debug("parse_failed", text=text, reason=reason, **extra)

    def format_not_supported(self, format: str, **extra) -> None:
        """Log a recognised notation that has no parser."""
        self._logger.info("format_not_supported", format=format, **extra)

    def low_confidence(
        self,
        item: str,
        rule: str,
        confidence: float,
        **extra
    ) -> None:
        """Log a speculative extraction match."""
        self._logger.warning(
            "low_confidence",
            item=item,
            rule=rule,
            confidence=confidence,
            **extra
        )

    def duplicates_found(self, groups: int, items: int, **extra) -> None:
        self._logger.info("duplicates_found", groups=groups, items=items, **extra)

    def route_built(self, strategy: str, points: int, total_m: float, **extra) -> None:
        self._logger.info(
            "route_built",
            strategy=strategy,
            points=points,
            total_m=round(total_m, 2),
            **extra
        )

    def export_written(self, path: str, format: str, points: int, **extra) -> None:
        self._logger.info("export_written", path=path, format=format, points=points, **extra)

    def batch_summary(
        self,
        total: int,
        located: int,
        unlocated: int,
        with_warnings: int = 0,
        **extra
    ) -> None:
        """Log batch locating summary."""
        self._logger.info(
            "batch_summary",
            total=total,
            located=located,
            unlocated=unlocated,
            with_warnings=with_warnings,
            **extra
        )

    def info(self, event: str, **kwargs) -> None:
        self._logger.info(event, **kwargs)

    def warning(self, event: str, **kwargs) -> None:
        self._logger.warning(event, **kwargs)

    def error(self, event: str, **kwargs) -> None:
        self._logger.error(event, **kwargs)

    def debug(self, event: str, **kwargs) -> None:
        self._logger.debug(event, **kwargs)
