"""Exceptions raised by the spot services"""


class SpotServiceError(Exception):
    """Base class for all spot service errors"""


class InvalidCoordinate(SpotServiceError, ValueError):
    """Latitude, longitude or radius outside its valid range"""


class InvalidRegion(SpotServiceError, ValueError):
    """Unknown continent or malformed country code"""


class StoreUnavailable(SpotServiceError):
    """DynamoDB request failed (transport or service error)"""


class InconsistentKey(SpotServiceError):
    """Key shape does not match the entity's declared key schema"""
