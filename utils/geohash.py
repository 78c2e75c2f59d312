"""Geohash utility functions for spatial indexing

Cells are handled in two interchangeable forms:
  - binary: a string of '0'/'1' bisection bits, longitude first, then
    alternating with latitude. Prefix relation equals containment, which
    makes it usable as a DynamoDB sort key for begins_with queries.
  - base32: the familiar geohash text, 5 bits per character.
"""
from collections import namedtuple
from typing import Tuple

from models.position import validate_coordinates


# Base32 encoding for geohash
BASE32 = "0123456789bcdefghjkmnpqrstuvwxyz"

# Bits stored on every spot (12 base32 characters, a few centimetres)
INDEX_BITS = 60


class BoundingBox(namedtuple("BoundingBox", ["lat_min", "lat_max", "lon_min", "lon_max"])):
    """Axis-aligned latitude/longitude rectangle in degrees"""

    __slots__ = ()

    def contains(self, latitude: float, longitude: float) -> bool:
        return (self.lat_min <= latitude <= self.lat_max and
                self.lon_min <= longitude <= self.lon_max)


def split_bits(bits: int) -> Tuple[int, int]:
    """Return (longitude bits, latitude bits) of a cell with `bits` total bits"""
    return (bits + 1) // 2, bits // 2


def cell_size(bits: int) -> Tuple[float, float]:
    """Return (height, width) in degrees of a cell with `bits` total bits"""
    lon_bits, lat_bits = split_bits(bits)
    return 180.0 / (1 << lat_bits), 360.0 / (1 << lon_bits)


def bisect_index(value: float, low: float, high: float, bits: int) -> int:
    """
    Index of the interval holding `value` after halving [low, high] `bits` times

    A value on a midpoint belongs to the upper half.
    """
    index = 0
    for _ in range(bits):
        mid = (low + high) / 2
        index <<= 1
        if value >= mid:
            index |= 1
            low = mid
        else:
            high = mid
    return index


def interleave(lon_index: int, lat_index: int, bits: int) -> str:
    """Build a binary cell from its longitude and latitude interval indexes"""
    lon_bits, lat_bits = split_bits(bits)
    chars = []
    for position in range(bits):
        if position % 2 == 0:
            shift = lon_bits - 1 - position // 2
            chars.append('1' if (lon_index >> shift) & 1 else '0')
        else:
            shift = lat_bits - 1 - position // 2
            chars.append('1' if (lat_index >> shift) & 1 else '0')
    return ''.join(chars)


def deinterleave(cell: str) -> Tuple[int, int]:
    """Split a binary cell into its (longitude index, latitude index)"""
    if any(c not in '01' for c in cell):
        raise ValueError(f"Invalid binary geohash: {cell!r}")

    lon_index = 0
    lat_index = 0
    for position, char in enumerate(cell):
        if position % 2 == 0:
            lon_index = (lon_index << 1) | (char == '1')
        else:
            lat_index = (lat_index << 1) | (char == '1')
    return lon_index, lat_index


def encode_binary(latitude: float, longitude: float, bits: int = INDEX_BITS) -> str:
    """
    Encode latitude/longitude to a binary geohash

    Args:
        latitude: Latitude (-90 to 90)
        longitude: Longitude (-180 to 180)
        bits: Number of bits (default 60)

    Returns:
        String of '0'/'1' characters of length `bits`
    """
    validate_coordinates(latitude, longitude)
    if bits < 0:
        raise ValueError(f"bits must be positive, got {bits}")

    lon_bits, lat_bits = split_bits(bits)
    lon_index = bisect_index(float(longitude), -180.0, 180.0, lon_bits)
    lat_index = bisect_index(float(latitude), -90.0, 90.0, lat_bits)
    return interleave(lon_index, lat_index, bits)


def encode(latitude: float, longitude: float, precision: int = 12) -> str:
    """
    Encode latitude/longitude to geohash

    Args:
        latitude: Latitude (-90 to 90)
        longitude: Longitude (-180 to 180)
        precision: Length of geohash (default 12)

    Returns:
        Geohash string
    """
    return to_base32(encode_binary(latitude, longitude, precision * 5))


def to_base32(cell: str) -> str:
    """Convert a binary cell whose length is a multiple of 5 to base32 text"""
    if len(cell) % 5:
        raise ValueError(f"Binary geohash length must be a multiple of 5, got {len(cell)}")
    return ''.join(BASE32[int(cell[i:i + 5], 2)] for i in range(0, len(cell), 5))


def from_base32(geohash: str) -> str:
    """Convert base32 geohash text to its binary cell"""
    chars = []
    for char in geohash:
        idx = BASE32.find(char)
        if idx < 0:
            raise ValueError(f"Invalid geohash character: {char!r}")
        chars.append(format(idx, '05b'))
    return ''.join(chars)


def bounding_box(cell: str) -> BoundingBox:
    """Return the rectangle a binary cell denotes"""
    lon_index, lat_index = deinterleave(cell)
    height, width = cell_size(len(cell))
    lat_min = -90.0 + lat_index * height
    lon_min = -180.0 + lon_index * width
    return BoundingBox(lat_min, lat_min + height, lon_min, lon_min + width)


def decode_bounding_box(geohash: str) -> BoundingBox:
    """Return the rectangle a base32 geohash denotes"""
    return bounding_box(from_base32(geohash))


def decode(geohash: str) -> Tuple[float, float]:
    """
    Decode geohash to latitude/longitude

    Args:
        geohash: Geohash string

    Returns:
        Tuple of (latitude, longitude) at the center of the cell
    """
    box = decode_bounding_box(geohash)
    return (box.lat_min + box.lat_max) / 2, (box.lon_min + box.lon_max) / 2
