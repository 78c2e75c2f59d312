"""Distance calculation utilities using Haversine formula

A spherical earth is used everywhere: circle bounding boxes, radius filtering
and test fixtures all share EARTH_RADIUS_METERS.
"""
import math

from models.position import Position


EARTH_RADIUS_METERS = 6371000.0


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate distance between two coordinates using Haversine formula

    Args:
        lat1, lon1: First coordinate
        lat2, lon2: Second coordinate

    Returns:
        Distance in meters
    """
    dLat = math.radians(lat2 - lat1)
    dLon = math.radians(lon2 - lon1)

    a = (math.sin(dLat / 2) * math.sin(dLat / 2) +
         math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) *
         math.sin(dLon / 2) * math.sin(dLon / 2))
    a = min(1.0, max(0.0, a))

    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def distance_between(a: Position, b: Position) -> float:
    """Great-circle distance in meters between two positions"""
    return calculate_distance(a.latitude, a.longitude, b.latitude, b.longitude)


def destination(origin: Position, distance_meters: float, bearing_degrees: float) -> Position:
    """
    Position reached by travelling `distance_meters` from origin along a bearing

    Args:
        origin: Starting position
        distance_meters: Distance along the great circle
        bearing_degrees: 0 = North, 90 = East, 180 = South, 270 = West
    """
    angular = distance_meters / EARTH_RADIUS_METERS
    bearing = math.radians(bearing_degrees)
    lat1 = math.radians(origin.latitude)
    lon1 = math.radians(origin.longitude)

    lat2 = math.asin(
        math.sin(lat1) * math.cos(angular) +
        math.cos(lat1) * math.sin(angular) * math.cos(bearing)
    )
    lon2 = lon1 + math.atan2(
        math.sin(bearing) * math.sin(angular) * math.cos(lat1),
        math.cos(angular) - math.sin(lat1) * math.sin(lat2)
    )

    lat = max(-90.0, min(90.0, math.degrees(lat2)))
    # normalise to [-180, 180)
    lon = (math.degrees(lon2) + 540.0) % 360.0 - 180.0
    return Position(lat, lon)
