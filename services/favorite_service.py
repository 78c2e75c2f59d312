"""Favorite service"""
from typing import List, Optional

from aws_lambda_powertools import Logger

from models.favorite import Favorite
from models.keys import CompositeKey
from services.persistence_service import PersistenceService
from utils.dynamodb import TABLES

logger = Logger()


class FavoriteService:
    """Service for the favorite spots of a user"""

    def __init__(self, persistence: Optional[PersistenceService] = None):
        self.persistence = persistence or PersistenceService(Favorite, TABLES['FAVORITES'])

    def add_favorite(self, username: str, spot_id: str) -> Favorite:
        """Mark a spot as favorite; adding it again replaces the marker"""
        favorite = self.persistence.save(Favorite(username=username, spot_id=spot_id))
        logger.info(f"Added favorite {spot_id} for {username}")
        return favorite

    def get_favorite(self, username: str, spot_id: str) -> Optional[Favorite]:
        return self.persistence.get_by_composite_key(username, spot_id)

    def remove_favorite(self, username: str, spot_id: str) -> None:
        """Remove a favorite; removing a missing one is a no-op"""
        self.persistence.delete_by_key(CompositeKey(username, spot_id))

    def list_favorites(self, username: str) -> List[Favorite]:
        """All favorites of a user, ordered by spot id"""
        return self.persistence.query(None, username)
