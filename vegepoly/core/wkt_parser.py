"""
WKT polygon ingestion.

Exports from the field are only loosely WKT: spacing is irregular, rings are
sometimes left open and some rows carry trailing text after the literal. Two
strategies are tried in order:

1. Bracket rewriting: the literal is rewritten into a ``Polygon([(x,y),...])``
   tuple list and parsed strictly. Any bad or non-finite pair fails the
   whole attempt.
2. Token scan: the exterior ring after ``POLYGON((`` is split on commas
   and whitespace. Bad or non-finite pairs are skipped with a warning.

Both strategies are plain functions so they can be exercised separately.
"""

import math
from typing import List, Optional

import structlog

from .geometry import Point, Polygon, close_ring

logger = structlog.get_logger()

POLYGON_MARKER = "POLYGON(("
MULTIPOLYGON_MARKER = "MULTIPOLYGON(("
RING_END = "))"

REWRITTEN_START = "Polygon([("
REWRITTEN_END = ")])"
REWRITTEN_SEPARATOR = "),("


class GeometryError(ValueError):
    """Base class for geometry text that cannot be turned into a polygon."""

    def __init__(self, message: str, text: str = ""):
        super().__init__(message)
        self.text = text


class UnsupportedGeometryError(GeometryError):
    """Geometry type is valid WKT but not handled (multi-part geometries)."""


class MalformedGeometryError(GeometryError):
    """Text does not contain a recognisable polygon literal."""


class EmptyGeometryError(GeometryError):
    """Polygon literal was found but no coordinate pair could be read."""


def rewrite_polygon_literal(text: str) -> str:
    """
    Rewrite a WKT polygon literal into bracketed tuple-list form.

    ``POLYGON((0 0,1 0,1 1))`` becomes ``Polygon([(0,0),(1,0),(1,1)])``.
    Everything after the second ring terminator is dropped, which discards
    leftover rings and trailing row data.

    Args:
        text: Raw geometry text

    Returns:
        Rewritten string, ready for extract_polygon_from_rewritten
    """
    result = text.replace(POLYGON_MARKER, REWRITTEN_START)
    result = result.replace(RING_END, REWRITTEN_END)
    result = result.replace(",", REWRITTEN_SEPARATOR)
    result = result.replace(" ", ",")

    first = result.find(REWRITTEN_END)
    if first != -1:
        second = result.find(REWRITTEN_END, first + len(REWRITTEN_END))
        if second != -1:
            result = result[:second + len(REWRITTEN_END)]

    return result


def extract_polygon_from_rewritten(rewritten: str) -> Optional[Polygon]:
    """
    Parse the output of rewrite_polygon_literal.

    Returns None rather than raising when anything does not parse, so the
    caller can fall back to the token scan.
    """
    start = rewritten.find(REWRITTEN_START)
    if start == -1:
        return None
    start += len(REWRITTEN_START)

    end = rewritten.rfind(REWRITTEN_END)
    if end == -1:
        end = len(rewritten)
    if start >= end:
        return None

    coords = []
    for pair in rewritten[start:end].split(REWRITTEN_SEPARATOR):
        # Spaces next to commas leave empty fields behind
        fields = [f for f in pair.split(",") if f.strip()]
        if len(fields) != 2:
            return None
        try:
            x, y = float(fields[0]), float(fields[1])
        except ValueError:
            return None
        if not (math.isfinite(x) and math.isfinite(y)):
            return None
        coords.append(Point(x, y))

    if not coords:
        return None

    return Polygon(tuple(close_ring(coords)))


def parse_polygon_tokens(text: str) -> Polygon:
    """
    Permissive polygon parser.

    Args:
        text: Raw geometry text containing POLYGON(( or MULTIPOLYGON((

    Returns:
        Polygon with the coordinates that could be read

    Raises:
        MalformedGeometryError: No polygon marker in the text
        EmptyGeometryError: No coordinate pair could be read
    """
    if MULTIPOLYGON_MARKER in text:
        marker = MULTIPOLYGON_MARKER
    elif POLYGON_MARKER in text:
        marker = POLYGON_MARKER
    else:
        raise MalformedGeometryError("Invalid format: no POLYGON(( marker", text)

    # Only the exterior ring is read; holes and trailing row data are dropped
    body = text[text.find(marker) + len(marker):]
    end = body.find(")")
    if end != -1:
        body = body[:end]

    coords: List[Point] = []
    for token in body.split(","):
        parts = token.split()
        if len(parts) != 2:
            logger.warning("Invalid coordinate pair format", pair=token)
            continue
        try:
            x, y = float(parts[0]), float(parts[1])
        except ValueError:
            logger.warning("Could not parse coordinates", pair=token)
            continue
        if not (math.isfinite(x) and math.isfinite(y)):
            logger.warning("Non-finite coordinates", pair=token)
            continue
        coords.append(Point(x, y))

    if not coords:
        raise EmptyGeometryError("Empty polygon", text)

    return Polygon(tuple(close_ring(coords)))


def parse_geometry(text: str) -> Polygon:
    """
    Turn one geometry string into a Polygon.

    Args:
        text: Row text holding a POLYGON((...)) literal

    Returns:
        Polygon with a closed exterior ring and no holes

    Raises:
        UnsupportedGeometryError: Text holds a MULTIPOLYGON
        MalformedGeometryError: Text holds no POLYGON(( literal
        EmptyGeometryError: No coordinate could be read
    """
    if "MULTIPOLYGON" in text:
        raise UnsupportedGeometryError("MULTIPOLYGON geometries are not supported", text)
    if POLYGON_MARKER not in text:
        raise MalformedGeometryError("Invalid format: no POLYGON(( marker", text)

    polygon = extract_polygon_from_rewritten(rewrite_polygon_literal(text))
    if polygon is not None:
        return polygon

    logger.debug("Bracket rewrite failed, falling back to token scan")
    return parse_polygon_tokens(text)
