"""Spot service"""
import time
import concurrent.futures
from typing import Dict, List, Optional

from aws_lambda_powertools import Logger

from config.constants import (
    CONTINENT_COUNTRY_INDEX,
    CONTINENT_GEOHASH_INDEX,
    SEARCH_MAX_WORKERS,
)
from models.position import Position
from models.region import Continent, normalize_country
from models.spot import Spot, SpotDistance
from services.persistence_service import PersistenceService
from utils.circle_query import search_cells, validate_radius
from utils.distance import distance_between
from utils.dynamodb import TABLES

logger = Logger()


class SpotService:
    """Service for spot retrieval, by id, region or distance"""

    def __init__(
        self,
        persistence: Optional[PersistenceService] = None,
        spot_class=Spot,
        max_workers: int = SEARCH_MAX_WORKERS
    ):
        self.persistence = persistence or PersistenceService(spot_class, TABLES['SPOTS'])
        self.max_workers = max_workers

    def get_by_id(self, spot_id: str) -> Optional[Spot]:
        """Get spot by ID, None if it does not exist"""
        return self.persistence.get_by_hash_key(spot_id)

    def save(self, spot: Spot) -> str:
        """
        Save or fully replace a spot

        Returns:
            The spot id (generated on first save)
        """
        self.persistence.save(spot)
        logger.info(f"Saved spot {spot.spot_id} in {spot.continent}/{spot.country}")
        return spot.spot_id

    def delete(self, spot: Spot) -> None:
        self.persistence.delete(spot)

    def delete_all(self) -> int:
        """Delete all spots (test and administrative use only)"""
        return self.persistence.delete_all()

    def find_all(self) -> List[Spot]:
        """List all spots (scan - administrative use only, potentially slow)"""
        return self.persistence.find_all()

    def find_by_continent(self, continent) -> List[Spot]:
        """All spots of a continent"""
        continent_code = Continent.from_code(continent).code
        return self.persistence.query(CONTINENT_COUNTRY_INDEX, continent_code)

    def find_by_country(self, continent, country: str) -> List[Spot]:
        """
        All spots of a country

        The continent is required as it is the partition key of the index;
        the country is its sort key and is matched exactly.
        """
        continent_code = Continent.from_code(continent).code
        country_code = normalize_country(country)
        return self.persistence.query(CONTINENT_COUNTRY_INDEX, continent_code, country_code)

    def _query_cell(self, continent_code: str, cell: str) -> List[Spot]:
        return self.persistence.query(
            CONTINENT_GEOHASH_INDEX,
            continent_code,
            cell,
            begins_with=True
        )

    def find_in_radius(self, continent, center: Position, radius_meters: float) -> List[SpotDistance]:
        """
        Find spots within a radius of a position

        Args:
            continent: Continent in which the search takes place (index partition key)
            center: Center of the search circle
            radius_meters: Search radius in meters

        Returns:
            Spots within the radius with their distance, nearest first
            (ties ordered by spot id)
        """
        continent_code = Continent.from_code(continent).code
        radius = validate_radius(radius_meters)
        cells = sorted(search_cells(center, radius))

        logger.info(f"🔍 Radius search in {continent_code} around "
                    f"{center.latitude:.6f}, {center.longitude:.6f} ({radius:.0f}m): "
                    f"{len(cells)} cells of {len(cells[0])} bits")

        query_start_time = time.time()
        candidates: Dict[str, Spot] = {}

        # Query cells in parallel; the first failing cell fails the search
        workers = max(1, min(self.max_workers, len(cells)))
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(self._query_cell, continent_code, cell) for cell in cells]
            results = [future.result() for future in futures]

        for spots in results:
            for spot in spots:
                candidates.setdefault(spot.spot_id, spot)

        matches = []
        for spot in candidates.values():
            distance = distance_between(center, spot.position)
            if distance <= radius:
                matches.append(SpotDistance(spot, distance))

        matches.sort(key=lambda match: (match.distance, match.spot_id))

        logger.info(f"   {len(candidates)} candidates, {len(matches)} within radius "
                    f"in {time.time() - query_start_time:.2f}s")
        return matches
