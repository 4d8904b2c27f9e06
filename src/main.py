"""Main application entry point for the restaurant ordering service.

This module provides the FastAPI application factory and configuration
for running the service locally or in production.
"""

import logging
import os
from pathlib import Path

from fastapi import FastAPI

from restaurant_ordering_service.handlers.api_handler import create_app
from restaurant_ordering_service.observability import configure_logging, setup_observability
from restaurant_ordering_service.repositories.menu_repository import MenuItemRepository
from restaurant_ordering_service.repositories.mongo_connection import MongoConnection
from restaurant_ordering_service.repositories.order_repository import OrderRepository
from restaurant_ordering_service.repositories.post_repository import PostRepository
from restaurant_ordering_service.services.menu_service import MenuService
from restaurant_ordering_service.services.order_service import OrderService
from restaurant_ordering_service.services.post_service import PostService
from restaurant_ordering_service.services.upload_service import ImageUploadService

logger = logging.getLogger(__name__)


def create_mongo_connection() -> MongoConnection:
    """Create the MongoDB connection from environment variables.

    Returns:
        MongoConnection for the configured database

    Raises:
        ValueError: If MONGODB_URI is not set
    """
    uri = os.getenv("MONGODB_URI")
    if not uri:
        raise ValueError("MONGODB_URI must be set in environment")

    db_name = os.getenv("MONGODB_DB_NAME", "restaurant_ordering")
    logger.info(f"Using MongoDB database '{db_name}'")
    return MongoConnection(uri=uri, db_name=db_name)


def get_admin_api_keys() -> list[str]:
    """Read the comma-separated admin API keys.

    Returns:
        List of keys (empty when the admin guard is disabled)
    """
    api_keys_str = os.getenv("ADMIN_API_KEY", "")
    api_keys = [key.strip() for key in api_keys_str.split(",") if key.strip()]

    if not api_keys:
        logger.warning("No ADMIN_API_KEY configured - menu admin and upload endpoints are unprotected")

    return api_keys


def create_application() -> FastAPI:
    """Create and configure the FastAPI application with all dependencies.

    This factory function:
    1. Configures logging
    2. Opens the MongoDB connection
    3. Initializes repositories
    4. Creates services
    5. Creates the FastAPI app (which closes the connection on shutdown)
    6. Sets up observability when OTEL_ENABLED is true

    Returns:
        Configured FastAPI application instance
    """
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    logger.info("Initializing restaurant ordering service...")

    connection = create_mongo_connection()
    database = connection.database

    menu_repository = MenuItemRepository(database)
    order_repository = OrderRepository(database)
    post_repository = PostRepository(database)

    upload_dir = Path(os.getenv("UPLOAD_DIR", "public/uploads"))
    url_prefix = os.getenv("UPLOAD_URL_PREFIX", "/uploads")

    app = create_app(
        menu_service=MenuService(menu_repository=menu_repository),
        order_service=OrderService(
            menu_repository=menu_repository, order_repository=order_repository
        ),
        upload_service=ImageUploadService(upload_dir=upload_dir, url_prefix=url_prefix),
        post_service=PostService(post_repository=post_repository),
        api_keys=get_admin_api_keys(),
        mongo_connection=connection,
    )

    logger.info(f"Uploads stored in {upload_dir} and served under {url_prefix}")

    if os.getenv("OTEL_ENABLED", "false").lower() == "true":
        setup_observability(app)

    logger.info("Restaurant ordering service initialized successfully")

    return app


# Create the FastAPI application instance (only when not in test mode)
# This prevents the app from being created during test collection
if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app = create_application()
else:
    app = FastAPI()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8001"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Starting development server on {host}:{port}")
    logger.info(f"API documentation available at http://{host}:{port}/docs")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
