"""User model"""
from typing import Optional
from datetime import datetime

from models.keys import KeySchema, SimpleKey


class User:
    """User profile, identified by its username"""

    KEY_SCHEMA = KeySchema("username")
    ID_PREFIX = "USR"

    def __init__(
        self,
        username: Optional[str] = None,
        email: Optional[str] = None,
        display_name: Optional[str] = None,
        created_at: Optional[str] = None
    ):
        self.username = username
        self.email = email
        self.display_name = display_name
        self.created_at = created_at or datetime.utcnow().isoformat()

    def key(self) -> SimpleKey:
        return SimpleKey(self.username)

    def assign_id(self, username: str) -> None:
        self.username = username

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        result = {
            "username": self.username,
            "createdAt": self.created_at
        }
        if self.email:
            result["email"] = self.email
        if self.display_name:
            result["displayName"] = self.display_name
        return result

    @classmethod
    def from_dynamodb_item(cls, item: dict) -> "User":
        """Create User from DynamoDB item"""
        return cls(
            username=item.get("username", {}).get("S"),
            email=item.get("email", {}).get("S") if "email" in item else None,
            display_name=item.get("displayName", {}).get("S") if "displayName" in item else None,
            created_at=item.get("createdAt", {}).get("S") if "createdAt" in item else None
        )

    def to_dynamodb_item(self) -> dict:
        """Convert to DynamoDB item format"""
        item = {
            "username": {"S": self.username},
            "createdAt": {"S": self.created_at}
        }
        if self.email:
            item["email"] = {"S": self.email}
        if self.display_name:
            item["displayName"] = {"S": self.display_name}
        return item
