"""Continent and country codes"""
import re
from enum import Enum

from utils.exceptions import InvalidRegion


COUNTRY_CODE_PATTERN = re.compile(r"^[A-Z]{2}$")


class Continent(Enum):
    """Continents a spot can be registered in, used as index partition key"""

    AFRICA = "AF"
    ANTARCTICA = "AN"
    ASIA = "AS"
    EUROPE = "EU"
    NORTH_AMERICA = "NA"
    OCEANIA = "OC"
    SOUTH_AMERICA = "SA"

    @property
    def code(self) -> str:
        return self.value

    @classmethod
    def from_code(cls, code) -> "Continent":
        """Accept a Continent or a (case-insensitive) two letter code"""
        if isinstance(code, cls):
            return code
        try:
            return cls(str(code).strip().upper())
        except ValueError:
            raise InvalidRegion(f"Unknown continent code: {code!r}")


def normalize_country(code) -> str:
    """Return the ISO-3166 alpha-2 country code in upper case"""
    normalized = str(code or "").strip().upper()
    if not COUNTRY_CODE_PATTERN.match(normalized):
        raise InvalidRegion(f"Country code must be two letters, got {code!r}")
    return normalized
