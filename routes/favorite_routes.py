"""Favorite routes"""
from aws_lambda_powertools import Logger, Tracer, Metrics

from routes.errors import error_response
from services.favorite_service import FavoriteService
from services.spot_service import SpotService


logger = Logger()
tracer = Tracer()
metrics = Metrics()

favorite_service = FavoriteService()
spot_service = SpotService()


def register_favorite_routes(app):
    """Register favorite routes"""

    @app.get("/api/v1/users/<username>/favorites")
    @tracer.capture_method
    def list_favorites(username: str):
        """List the favorite spots of a user"""
        try:
            favorites = favorite_service.list_favorites(username)
            return {
                "favorites": [f.to_dict() for f in favorites],
                "total": len(favorites)
            }, 200
        except Exception as e:
            return error_response("list favorites", e)

    @app.put("/api/v1/users/<username>/favorites/<spot_id>")
    @tracer.capture_method
    def add_favorite(username: str, spot_id: str):
        """Mark a spot as favorite"""
        try:
            if not spot_service.get_by_id(spot_id):
                return {"error": "Spot not found"}, 404

            favorite = favorite_service.add_favorite(username, spot_id)
            metrics.add_metric(name="FavoriteAdded", unit="Count", value=1)
            return favorite.to_dict(), 200
        except Exception as e:
            return error_response("add favorite", e)

    @app.delete("/api/v1/users/<username>/favorites/<spot_id>")
    @tracer.capture_method
    def remove_favorite(username: str, spot_id: str):
        """Remove a favorite (no-op when it does not exist)"""
        try:
            favorite_service.remove_favorite(username, spot_id)
            return {"username": username, "spotId": spot_id, "deleted": True}, 200
        except Exception as e:
            return error_response("remove favorite", e)
