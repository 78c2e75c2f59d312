"""User service"""
from typing import List, Optional

from models.user import User
from services.persistence_service import PersistenceService
from utils.dynamodb import TABLES


class UserService:
    """
    Service for user profile operations

    Simple-key sibling of FavoriteService over the generic persistence layer;
    no route exposes user profiles.
    """

    def __init__(self, persistence: Optional[PersistenceService] = None):
        self.persistence = persistence or PersistenceService(User, TABLES['USERS'])

    def get_user(self, username: str) -> Optional[User]:
        """Get user by username"""
        return self.persistence.get_by_hash_key(username)

    def save_user(self, user: User) -> User:
        """Create or replace a user; a username is generated when missing"""
        return self.persistence.save(user)

    def delete_user(self, user: User) -> None:
        self.persistence.delete(user)

    def list_users(self) -> List[User]:
        """List all users (scan - use sparingly)"""
        return self.persistence.find_all()
