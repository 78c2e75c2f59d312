"""Position model"""
import math
from collections import namedtuple

from utils.exceptions import InvalidCoordinate


def validate_coordinates(latitude: float, longitude: float) -> None:
    """Raise InvalidCoordinate unless latitude/longitude are finite and in range"""
    try:
        lat = float(latitude)
        lon = float(longitude)
    except (TypeError, ValueError):
        raise InvalidCoordinate(f"Coordinates must be numbers, got {latitude!r}, {longitude!r}")

    if not math.isfinite(lat) or not -90.0 <= lat <= 90.0:
        raise InvalidCoordinate(f"latitude must be between -90 and 90, got {latitude}")
    if not math.isfinite(lon) or not -180.0 <= lon <= 180.0:
        raise InvalidCoordinate(f"longitude must be between -180 and 180, got {longitude}")


class Position(namedtuple("Position", ["latitude", "longitude"])):
    """Immutable (latitude, longitude) pair in degrees"""

    __slots__ = ()

    def __new__(cls, latitude: float, longitude: float):
        validate_coordinates(latitude, longitude)
        return super().__new__(cls, float(latitude), float(longitude))

    def to_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}
