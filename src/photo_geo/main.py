"""CLI entry point for photo geolocation tools."""

import argparse
import json
import sys
from glob import glob
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

from .config import get_settings
from .exceptions import GeoException, InvalidInputError, JSONParseError
from .formats.detector import CoordinateFormatDetector
from .formats.formatter import CoordinateFormatter
from .formats.parser import CoordinateParser
from .geo.duplicates import find_duplicates
from .geo.nearby import find_nearby
from .geo.route import RouteStats, build_route
from .locator import PhotoLocator
from .logging import configure_logging, GeoLogger
from .models.enums import CoordinateFormat, RouteStrategy
from .models.geo_point import GeoPoint
from .models.located_item import LocatedItem
from .output import WRITERS, get_writer


def setup_logging(verbose: bool = False, log_format: str = None) -> None:
    """Configure logging.

    Args:
        verbose: Enable debug level logging
        log_format: Output format ('json' or 'text'). Defaults to settings value.
    """
    settings = get_settings()
    level = "DEBUG" if verbose else settings.log_level
    fmt = log_format or settings.log_format
    configure_logging(log_level=level, log_format=fmt)


def _format_choice(value: str) -> CoordinateFormat:
    fmt = CoordinateFormat.from_name(value)
    if fmt is None:
        choices = ", ".join(f.value for f in CoordinateFormat)
        raise argparse.ArgumentTypeError(f"unknown format '{value}' (choose from {choices})")
    return fmt


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="photo-geo",
        description="Detect, parse and export photo coordinates",
        epilog="Example: photo-geo route photos.json --strategy nearest -f gpx -o trip.gpx",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--log-format",
        choices=["json", "text"],
        default=None,
        help="Log output format: 'json' for structured (default), 'text' for human-readable",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 1.0.0",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    detect = commands.add_parser("detect", help="Print the notation of a coordinate string")
    detect.add_argument("text", help="Coordinate string, e.g. \"55.7558, 37.6173\"")

    parse = commands.add_parser("parse", help="Parse a coordinate string and reformat it")
    parse.add_argument("text", help="Coordinate string")
    parse.add_argument(
        "--format",
        type=_format_choice,
        default=None,
        help="Input notation (decimal, dms, dm, formatted). Detected when omitted",
    )
    parse.add_argument(
        "--output-format",
        type=_format_choice,
        default=None,
        help="Output notation. Prints all four notations when omitted",
    )

    extract = commands.add_parser("extract", help="Extract coordinates from OCR result files")
    extract.add_argument(
        "input",
        nargs="+",
        help="OCR JSON or .txt file(s). Supports glob patterns (e.g., *.json)",
    )
    extract.add_argument(
        "--no-pretty",
        action="store_false",
        dest="pretty",
        help="Compact JSON output",
    )

    route = commands.add_parser("route", help="Build a route through located items")
    route.add_argument("input", help="JSON list of {id, name, lat, lon} objects")
    route.add_argument(
        "--strategy",
        choices=[s.value for s in RouteStrategy],
        default=RouteStrategy.SEQUENTIAL.value,
        help="Ordering strategy (default: sequential)",
    )
    route.add_argument("--start", type=int, default=None, help="Start item id (nearest only)")
    route.add_argument("-o", "--output", type=str, help="Export file path")
    route.add_argument(
        "-f",
        "--format",
        choices=sorted(WRITERS),
        help="Export format. Defaults to the output file extension",
    )

    duplicates = commands.add_parser("duplicates", help="Group items at the same spot")
    duplicates.add_argument("input", help="JSON list of {id, name, lat, lon} objects")
    duplicates.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Grouping radius in meters (default: from settings)",
    )

    nearby = commands.add_parser("nearby", help="List items around a reference item")
    nearby.add_argument("input", help="JSON list of {id, name, lat, lon} objects")
    nearby.add_argument("--id", type=int, required=True, dest="item_id", help="Reference item id")
    nearby.add_argument(
        "--radius",
        type=float,
        default=None,
        help="Search radius in km (default: from settings)",
    )

    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)


def expand_input_paths(patterns: list[str]) -> list[Path]:
    """Expand glob patterns to file paths."""
    paths = []
    for pattern in patterns:
        matches = glob(pattern)
        if matches:
            paths.extend(Path(m) for m in sorted(matches))
        else:
            # Treat as literal path
            paths.append(Path(pattern))
    return paths


def load_items(filepath: str) -> list[LocatedItem]:
    """
    Load located items from a JSON list of ``{id, name, lat, lon}`` objects.

    Entries with missing or out-of-range coordinates are kept without a
    location.

    Raises:
        FileNotFoundError: If the file does not exist.
        JSONParseError: If the file is not valid JSON.
        InvalidInputError: If the JSON is not a list of item objects.
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {filepath}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise JSONParseError(original_error=str(e), filepath=filepath)

    if not isinstance(data, list):
        raise InvalidInputError("Items file must contain a JSON array", filepath=filepath)

    items = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise InvalidInputError(
                f"Item {index} must be a JSON object", filepath=filepath
            )
        try:
            items.append(LocatedItem(
                id=entry.get("id", index + 1),
                name=entry.get("name") or f"item-{index + 1}",
                point=GeoPoint.try_of(entry.get("lat"), entry.get("lon")),
            ))
        except PydanticValidationError as e:
            raise InvalidInputError(
                f"Invalid item {index}: {e.errors()[0].get('msg', 'validation failed')}",
                filepath=filepath,
            )
    return items


def _print_json(data, pretty: bool = True) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2 if pretty else None, default=str))


# =============================================================================
# Subcommands
# =============================================================================

def cmd_detect(args: argparse.Namespace, logger: GeoLogger) -> int:
    fmt = CoordinateFormatDetector.detect(args.text)
    if fmt is None:
        print("unrecognized")
        return 1
    print(fmt.value)
    return 0


def cmd_parse(args: argparse.Namespace, logger: GeoLogger) -> int:
    point = CoordinateParser.parse(args.text, args.format)
    if not point.is_present:
        print("unrecognized", file=sys.stderr)
        return 1
    if args.output_format is not None:
        print(CoordinateFormatter.format(point, args.output_format))
    else:
        _print_json(CoordinateFormatter.format_all(point))
    return 0


def cmd_extract(args: argparse.Namespace, logger: GeoLogger) -> int:
    input_paths = expand_input_paths(args.input)
    existing_paths = [p for p in input_paths if p.exists()]
    if not existing_paths:
        logger.error("no_input_files", requested_paths=[str(p) for p in input_paths])
        return 1

    logger.info("processing_started", file_count=len(existing_paths))
    results = []
    with PhotoLocator() as locator:
        for path in existing_paths:
            try:
                item = locator.locate_ocr_file(path)
            except GeoException as e:
                logger.error("extract_error", file_path=str(path), error=str(e),
                             error_type=type(e).__name__)
                results.append({"file": str(path), "error": e.message})
                continue
            results.append({"file": str(path), **item.to_flat_dict()})

    _print_json(results, args.pretty)
    return 0 if any(r.get("lat") is not None for r in results) else 1


def cmd_route(args: argparse.Namespace, logger: GeoLogger) -> int:
    items = load_items(args.input)
    start = None
    if args.start is not None:
        start = next((item for item in items if item.id == args.start), None)
        if start is None:
            logger.error("start_not_found", item_id=args.start)
            return 1

    route = build_route(items, RouteStrategy(args.strategy), start)
    stats = RouteStats.from_route(route)

    if args.output:
        output_path = Path(args.output)
        format_name = args.format or output_path.suffix.lstrip(".").lower()
        get_writer(format_name).write(route, output_path)
    elif args.format:
        print(get_writer(args.format).to_string(route))
        return 0

    _print_json({"order": route.ids, **stats.to_dict()})
    return 0


def cmd_duplicates(args: argparse.Namespace, logger: GeoLogger) -> int:
    settings = get_settings()
    items = load_items(args.input)
    groups = find_duplicates(
        items,
        threshold_m=(
            args.threshold if args.threshold is not None
            else settings.duplicate_threshold_m
        ),
        very_close_m=settings.very_close_threshold_m,
    )
    _print_json([
        {
            "base": group.base.id,
            "ids": group.ids,
            "max_distance_km": group.max_distance_km(),
            "members": [member.to_flat_dict() for member in group.members],
        }
        for group in groups
    ])
    return 0


def cmd_nearby(args: argparse.Namespace, logger: GeoLogger) -> int:
    settings = get_settings()
    items = load_items(args.input)
    reference = next((item for item in items if item.id == args.item_id), None)
    if reference is None:
        logger.error("reference_not_found", item_id=args.item_id)
        return 1

    radius_km = args.radius if args.radius is not None else settings.nearby_radius_km
    matches = find_nearby(items, reference, radius_km)
    _print_json([
        {"id": item.id, "name": item.name, "distance_km": item.distance}
        for item in matches
    ])
    return 0


COMMANDS = {
    "detect": cmd_detect,
    "parse": cmd_parse,
    "extract": cmd_extract,
    "route": cmd_route,
    "duplicates": cmd_duplicates,
    "nearby": cmd_nearby,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose, args.log_format)
    logger = GeoLogger(__name__)

    try:
        return COMMANDS[args.command](args, logger)
    except FileNotFoundError as e:
        logger.error("input_not_found", error=str(e))
        return 1
    except GeoException as e:
        logger.error("command_failed", command=args.command, error=str(e),
                     error_type=type(e).__name__)
        return 1


if __name__ == "__main__":
    sys.exit(main())
