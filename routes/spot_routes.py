"""Spot routes"""
from aws_lambda_powertools import Logger, Tracer, Metrics

from models.position import Position
from models.spot import Spot
from routes.errors import error_response
from services.spot_service import SpotService


logger = Logger()
tracer = Tracer()
metrics = Metrics()

spot_service = SpotService()


def register_spot_routes(app):
    """Register spot routes"""

    @app.get("/api/v1/spots")
    @tracer.capture_method
    def list_spots():
        """List all spots (scan - administrative use)"""
        try:
            spots = spot_service.find_all()
            return {
                "spots": [s.to_dict() for s in spots],
                "total": len(spots)
            }, 200
        except Exception as e:
            return error_response("list spots", e)

    @app.get("/api/v1/spots/<spot_id>")
    @tracer.capture_method
    def get_spot(spot_id: str):
        """Get spot by ID"""
        try:
            logger.info(f"Getting spot: {spot_id}")
            spot = spot_service.get_by_id(spot_id)

            if not spot:
                return {"error": "Spot not found"}, 404

            metrics.add_metric(name="SpotRetrieved", unit="Count", value=1)
            return spot.to_dict(), 200
        except Exception as e:
            return error_response("get spot", e)

    @app.post("/api/v1/spots")
    @tracer.capture_method
    def create_spot():
        """Create a new spot"""
        try:
            body = app.current_event.json_body or {}

            missing = [f for f in ("continent", "country", "latitude", "longitude") if body.get(f) is None]
            if missing:
                return {"error": f"{', '.join(missing)} required"}, 400

            spot = Spot.from_dict(body)
            spot_id = spot_service.save(spot)

            logger.info(f"Created spot {spot_id} with geohash {spot.geohash}")
            metrics.add_metric(name="SpotCreated", unit="Count", value=1)
            return spot.to_dict(), 201
        except Exception as e:
            return error_response("create spot", e)

    @app.put("/api/v1/spots/<spot_id>")
    @tracer.capture_method
    def update_spot(spot_id: str):
        """Replace a spot"""
        try:
            existing = spot_service.get_by_id(spot_id)
            if not existing:
                return {"error": "Spot not found"}, 404

            body = app.current_event.json_body or {}
            data = {**existing.to_dict(), **body}

            spot = Spot.from_dict(data, spot_id=spot_id)
            spot.created_at = existing.created_at
            spot_service.save(spot)

            metrics.add_metric(name="SpotUpdated", unit="Count", value=1)
            return spot.to_dict(), 200
        except Exception as e:
            return error_response("update spot", e)

    @app.delete("/api/v1/spots/<spot_id>")
    @tracer.capture_method
    def delete_spot(spot_id: str):
        """Delete a spot (no-op when it does not exist)"""
        try:
            spot = spot_service.get_by_id(spot_id)
            if spot:
                spot_service.delete(spot)
                metrics.add_metric(name="SpotDeleted", unit="Count", value=1)
            return {"spotId": spot_id, "deleted": True}, 200
        except Exception as e:
            return error_response("delete spot", e)

    @app.get("/api/v1/continents/<continent>/spots")
    @tracer.capture_method
    def list_spots_by_region(continent: str):
        """List spots of a continent, optionally filtered by country"""
        try:
            query_params = app.current_event.query_string_parameters or {}
            country = query_params.get('country')

            if country:
                spots = spot_service.find_by_country(continent, country)
            else:
                spots = spot_service.find_by_continent(continent)

            return {
                "spots": [s.to_dict() for s in spots],
                "total": len(spots)
            }, 200
        except Exception as e:
            return error_response("list spots by region", e)

    @app.get("/api/v1/continents/<continent>/spots/nearby")
    @tracer.capture_method
    def list_nearby_spots(continent: str):
        """List spots within a radius (meters) of a position, nearest first"""
        try:
            query_params = app.current_event.query_string_parameters or {}
            latitude = query_params.get('latitude')
            longitude = query_params.get('longitude')
            radius = query_params.get('radius')

            if latitude is None or longitude is None or radius is None:
                return {"error": "latitude, longitude and radius are required"}, 400

            results = spot_service.find_in_radius(continent, Position(latitude, longitude), radius)

            metrics.add_metric(name="SpotsSearched", unit="Count", value=1)
            return {
                "spots": [r.to_dict() for r in results],
                "total": len(results)
            }, 200
        except Exception as e:
            return error_response("search nearby spots", e)
