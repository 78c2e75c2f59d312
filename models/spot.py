"""Spot model"""
from typing import Optional
from datetime import datetime

from models.keys import KeySchema, SimpleKey
from models.position import Position
from models.region import Continent, normalize_country
from utils.geohash import INDEX_BITS, encode_binary


class Spot:
    """A geographically located spot, indexed by continent, country and geohash"""

    KEY_SCHEMA = KeySchema("id")
    ID_PREFIX = "SPT"

    def __init__(
        self,
        continent,
        country: str,
        position: Position,
        spot_id: Optional[str] = None,
        name: Optional[str] = None,
        created_at: Optional[str] = None
    ):
        self.spot_id = spot_id
        self.continent = Continent.from_code(continent).code
        self.country = normalize_country(country)
        self.position = position
        self.name = name
        self.created_at = created_at or datetime.utcnow().isoformat()

    def key(self) -> SimpleKey:
        return SimpleKey(self.spot_id)

    def assign_id(self, spot_id: str) -> None:
        self.spot_id = spot_id

    @property
    def geohash(self) -> str:
        """Binary geohash of the current position at index precision"""
        return encode_binary(self.position.latitude, self.position.longitude, INDEX_BITS)

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        result = {
            "spotId": self.spot_id,
            "continent": self.continent,
            "country": self.country,
            "latitude": self.position.latitude,
            "longitude": self.position.longitude,
            "geohash": self.geohash,
        }
        if self.name:
            result["name"] = self.name
        if self.created_at:
            result["createdAt"] = self.created_at
        return result

    @classmethod
    def from_dict(cls, data: dict, spot_id: Optional[str] = None) -> "Spot":
        """Create Spot from a request body; the geohash is always derived"""
        latitude = data.get("latitude")
        longitude = data.get("longitude")
        return cls(
            continent=data.get("continent"),
            country=data.get("country"),
            position=Position(latitude, longitude),
            spot_id=spot_id,
            name=data.get("name"),
        )

    @classmethod
    def from_dynamodb_item(cls, item: dict) -> "Spot":
        """Create Spot from DynamoDB item"""
        return cls(
            continent=item.get("continent", {}).get("S", ""),
            country=item.get("country", {}).get("S", ""),
            position=Position(
                float(item.get("latitude", {}).get("N", "0")),
                float(item.get("longitude", {}).get("N", "0"))
            ),
            spot_id=item.get("id", {}).get("S"),
            name=item.get("name", {}).get("S") if "name" in item else None,
            created_at=item.get("createdAt", {}).get("S") if "createdAt" in item else None
        )

    def to_dynamodb_item(self) -> dict:
        """Convert to DynamoDB item format"""
        item = {
            "id": {"S": self.spot_id},
            "continent": {"S": self.continent},
            "country": {"S": self.country},
            "latitude": {"N": str(self.position.latitude)},
            "longitude": {"N": str(self.position.longitude)},
            "geohash": {"S": self.geohash},
        }
        if self.name:
            item["name"] = {"S": self.name}
        if self.created_at:
            item["createdAt"] = {"S": self.created_at}
        return item


class SpotDistance:
    """Radius search result: a spot and its distance in meters from the search center"""

    __slots__ = ("spot", "distance")

    def __init__(self, spot: Spot, distance: float):
        self.spot = spot
        self.distance = distance

    @property
    def spot_id(self) -> str:
        return self.spot.spot_id

    def to_dict(self) -> dict:
        result = self.spot.to_dict()
        result["distance"] = round(self.distance, 1)
        return result

    def __repr__(self) -> str:
        return f"SpotDistance({self.spot.spot_id!r}, {self.distance:.1f})"
