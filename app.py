"""
AWS Lambda handler for the spot finder API
Uses AWS Lambda Power Tools for API Gateway integration
"""

from aws_lambda_powertools import Logger, Tracer, Metrics
from aws_lambda_powertools.event_handler import APIGatewayRestResolver, CORSConfig
from aws_lambda_powertools.utilities.typing import LambdaContext
from aws_lambda_powertools.middleware_factory import lambda_handler_decorator

# Import route handlers
from routes.spot_routes import register_spot_routes
from routes.favorite_routes import register_favorite_routes

# Initialize AWS Lambda Power Tools
logger = Logger(service="spot-finder-api")
tracer = Tracer(service="spot-finder-api")
metrics = Metrics(namespace="SpotFinder", service="api")

# Create API Gateway resolver with CORS enabled
app = APIGatewayRestResolver(
    cors=CORSConfig(
        allow_origin="*",
        max_age=300,
        expose_headers=["Content-Type"],
        allow_headers=["Content-Type", "Authorization", "X-Api-Key"]
    )
)

# Register all routes
register_spot_routes(app)
register_favorite_routes(app)


@app.get("/health")
@tracer.capture_method
def get_health():
    """Health check endpoint"""
    logger.info("Health check requested")
    metrics.add_metric(name="HealthCheck", unit="Count", value=1)
    return {"status": "healthy", "service": "spot-finder-api"}


@lambda_handler_decorator
def middleware_handler(handler, event, context):
    """Middleware for logging and error handling"""
    logger.info("Lambda invocation started")

    try:
        response = handler(event, context)
        logger.info("Lambda invocation completed successfully")
        return response
    except Exception:
        logger.error("Lambda invocation failed", exc_info=True)
        raise


@middleware_handler
@logger.inject_lambda_context(log_event=True)
@tracer.capture_lambda_handler
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """
    Main Lambda handler function
    """
    return app.resolve(event, context)
