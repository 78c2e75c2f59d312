"""Error responses shared by route handlers"""
import json

from aws_lambda_powertools import Logger

from utils.exceptions import InconsistentKey, InvalidCoordinate, InvalidRegion, StoreUnavailable

logger = Logger()


def error_response(action: str, error: Exception):
    """Map a service error to a (body, status) response"""
    if isinstance(error, (InvalidCoordinate, InvalidRegion, InconsistentKey, json.JSONDecodeError)):
        logger.warning(f"Rejected request to {action}: {str(error)}")
        return {"error": f"Invalid request to {action}", "message": str(error)}, 400

    if isinstance(error, StoreUnavailable):
        logger.error(f"Store unavailable while trying to {action}", exc_info=True)
        return {"error": f"Failed to {action}", "message": "Store temporarily unavailable"}, 503

    logger.error(f"Error trying to {action}", exc_info=True)
    return {"error": f"Failed to {action}", "message": str(error)}, 500
