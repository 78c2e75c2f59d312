"""Decompose a search circle into geohash cell prefixes

The circle's bounding box is computed on the same sphere used by the distance
filter, then covered by every cell intersecting it at the coarsest precision
where one cell is no larger than the box. Querying those prefixes returns a
superset of the spots inside the circle.
"""
import math
from typing import List, Set, Tuple

from models.position import Position
from utils.distance import EARTH_RADIUS_METERS
from utils.exceptions import InvalidCoordinate
from utils.geohash import (
    INDEX_BITS,
    BoundingBox,
    bisect_index,
    cell_size,
    interleave,
    split_bits,
)


MAX_SEARCH_CELLS = 9

# Padding in degrees against floating point error at the box edges
EDGE_PADDING = 1e-9


def validate_radius(radius_meters: float) -> float:
    try:
        radius = float(radius_meters)
    except (TypeError, ValueError):
        raise InvalidCoordinate(f"radius must be a number, got {radius_meters!r}")
    if not math.isfinite(radius) or radius < 0:
        raise InvalidCoordinate(f"radius must be a non-negative number of meters, got {radius_meters}")
    return radius


def circle_bounding_box(center: Position, radius_meters: float) -> BoundingBox:
    """
    Bounding box of a circle on the sphere

    Latitude is clamped to [-90, 90]. Longitude bounds are left unwrapped, so
    they extend beyond +/-180 when the circle crosses the antimeridian; a
    circle enclosing a pole spans all longitudes.
    """
    radius = validate_radius(radius_meters)
    angular = radius / EARTH_RADIUS_METERS
    lat = math.radians(center.latitude)
    lon = math.radians(center.longitude)

    lat_min = lat - angular
    lat_max = lat + angular

    if lat_min > -math.pi / 2 and lat_max < math.pi / 2:
        delta_lon = math.asin(min(1.0, math.sin(angular) / math.cos(lat)))
        lon_min = math.degrees(lon - delta_lon) - EDGE_PADDING
        lon_max = math.degrees(lon + delta_lon) + EDGE_PADDING
    else:
        lon_min, lon_max = -180.0, 180.0

    return BoundingBox(
        max(-90.0, math.degrees(lat_min) - EDGE_PADDING),
        min(90.0, math.degrees(lat_max) + EDGE_PADDING),
        lon_min,
        lon_max,
    )


def longitude_ranges(box: BoundingBox) -> List[Tuple[float, float]]:
    """Split the box's longitude span into ranges inside [-180, 180]"""
    if box.lon_max - box.lon_min >= 360.0:
        return [(-180.0, 180.0)]
    if box.lon_min < -180.0:
        return [(box.lon_min + 360.0, 180.0), (-180.0, box.lon_max)]
    if box.lon_max > 180.0:
        return [(box.lon_min, 180.0), (-180.0, box.lon_max - 360.0)]
    return [(box.lon_min, box.lon_max)]


def _target_bits(box: BoundingBox) -> int:
    height = box.lat_max - box.lat_min
    width = min(box.lon_max - box.lon_min, 360.0)

    for bits in range(1, INDEX_BITS + 1):
        cell_height, cell_width = cell_size(bits)
        if cell_height <= height and cell_width <= width:
            return bits
    return INDEX_BITS


def _cell_indexes(box: BoundingBox, bits: int) -> Tuple[Set[int], range]:
    lon_bits, lat_bits = split_bits(bits)

    lon_indexes = set()
    for low, high in longitude_ranges(box):
        first = bisect_index(low, -180.0, 180.0, lon_bits)
        last = bisect_index(high, -180.0, 180.0, lon_bits)
        lon_indexes.update(range(first, last + 1))

    lat_indexes = range(
        bisect_index(box.lat_min, -90.0, 90.0, lat_bits),
        bisect_index(box.lat_max, -90.0, 90.0, lat_bits) + 1,
    )
    return lon_indexes, lat_indexes


def search_cells(center: Position, radius_meters: float) -> Set[str]:
    """
    Binary geohash prefixes whose cells together cover the search circle

    Args:
        center: Center of the circle
        radius_meters: Radius in meters

    Returns:
        Set of binary cell prefixes (at most 9)
    """
    box = circle_bounding_box(center, radius_meters)
    bits = _target_bits(box)

    lon_indexes, lat_indexes = _cell_indexes(box, bits)
    while bits > 1 and len(lon_indexes) * len(lat_indexes) > MAX_SEARCH_CELLS:
        bits -= 1
        lon_indexes, lat_indexes = _cell_indexes(box, bits)

    return {
        interleave(lon_index, lat_index, bits)
        for lon_index in lon_indexes
        for lat_index in lat_indexes
    }
