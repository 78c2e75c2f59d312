"""Favorite model"""
from typing import Optional
from datetime import datetime

from models.keys import CompositeKey, KeySchema


class Favorite:
    """A spot marked as favorite by a user, keyed by (username, spotId)"""

    KEY_SCHEMA = KeySchema("username", "spotId")

    def __init__(
        self,
        username: str,
        spot_id: str,
        created_at: Optional[str] = None
    ):
        self.username = username
        self.spot_id = spot_id
        self.created_at = created_at or datetime.utcnow().isoformat()

    def key(self) -> CompositeKey:
        return CompositeKey(self.username, self.spot_id)

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            "username": self.username,
            "spotId": self.spot_id,
            "createdAt": self.created_at
        }

    @classmethod
    def from_dynamodb_item(cls, item: dict) -> "Favorite":
        """Create Favorite from DynamoDB item"""
        return cls(
            username=item.get("username", {}).get("S", ""),
            spot_id=item.get("spotId", {}).get("S", ""),
            created_at=item.get("createdAt", {}).get("S") if "createdAt" in item else None
        )

    def to_dynamodb_item(self) -> dict:
        """Convert to DynamoDB item format"""
        return {
            "username": {"S": self.username},
            "spotId": {"S": self.spot_id},
            "createdAt": {"S": self.created_at}
        }
