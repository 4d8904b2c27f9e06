"""FastAPI application for the ordering API."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, File, Header, Query, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from restaurant_ordering_service.auth.api_dependencies import check_admin_api_key
from restaurant_ordering_service.auth.api_key_validator import APIKeyValidator
from restaurant_ordering_service.errors import ServiceError
from restaurant_ordering_service.models.api_models import ApiResponse, UploadResult, envelope
from restaurant_ordering_service.models.menu_models import (
    Category,
    MenuItem,
    MenuItemInput,
    MenuItemUpdate,
)
from restaurant_ordering_service.models.order_models import Order, OrderCreateRequest, OrderReceipt
from restaurant_ordering_service.models.post_models import Post, PostInput
from restaurant_ordering_service.repositories.mongo_connection import MongoConnection
from restaurant_ordering_service.services.menu_service import MenuService
from restaurant_ordering_service.services.order_service import OrderService
from restaurant_ordering_service.services.post_service import PostService
from restaurant_ordering_service.services.upload_service import ImageUploadService

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request parameters"
    first = errors[0]
    # drop the leading "body"/"query"/"path" segment
    location = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = first.get("msg", "invalid value")
    return f"Invalid request parameters: {location}: {message}" if location else f"Invalid request parameters: {message}"


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as a ``{code, data, msg}`` envelope.

    Args:
        app: Application to register the handlers on
    """

    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=envelope(exc.status_code, exc.message))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content=envelope(400, _describe_validation_error(exc)))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=envelope(exc.status_code, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(PyMongoError)
    async def handle_database_error(request: Request, exc: PyMongoError) -> JSONResponse:
        logger.exception(f"Database error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content=envelope(500, "Internal server error"))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content=envelope(500, "Internal server error"))


def create_app(
    menu_service: MenuService,
    order_service: OrderService,
    upload_service: ImageUploadService,
    post_service: PostService,
    api_keys: list[str] | None = None,
    mongo_connection: MongoConnection | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        menu_service: Service for menu catalog and admin operations
        order_service: Service for order intake and history
        upload_service: Service storing uploaded images
        post_service: Service for blog posts
        api_keys: Admin API keys; None or empty disables the admin guard
        mongo_connection: Connection closed when the application shuts down

    Returns:
        Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        if mongo_connection is not None:
            mongo_connection.close()

    app = FastAPI(
        title="Restaurant Ordering API",
        description="Menu catalog, ordering, image upload and blog posts",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Store services in app state for access in route handlers
    app.state.menu_service = menu_service
    app.state.order_service = order_service
    app.state.upload_service = upload_service
    app.state.post_service = post_service
    app.state.api_key_validator = APIKeyValidator(api_keys=api_keys) if api_keys else None

    register_exception_handlers(app)

    def require_admin_key(x_api_key: str | None = Header(None)) -> str | None:
        """Dependency guarding admin endpoints."""
        return check_admin_api_key(x_api_key=x_api_key, validator=app.state.api_key_validator)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy")

    # Menu

    @app.get("/categories", response_model=ApiResponse[list[Category]], tags=["Menu"])
    async def list_categories() -> ApiResponse[list[Category]]:
        """List the fixed dish categories."""
        return ApiResponse(code=200, data=app.state.menu_service.list_categories(), msg="Categories loaded")

    @app.get("/menu", response_model=ApiResponse[list[MenuItem]], tags=["Menu"])
    async def list_menu(
        include_inactive: str | None = Query(None, alias="includeInactive"),
    ) -> ApiResponse[list[MenuItem]]:
        """List dishes; ``includeInactive=1`` also returns deactivated ones."""
        items = await app.state.menu_service.list_menu_items(include_inactive=include_inactive == "1")
        return ApiResponse(code=200, data=items, msg="Menu loaded")

    @app.post("/menu", response_model=ApiResponse[MenuItem], status_code=201, tags=["Menu Admin"])
    async def create_menu_item(
        payload: MenuItemInput,
        _api_key: str | None = Depends(require_admin_key),
    ) -> ApiResponse[MenuItem]:
        """Create a dish."""
        item = await app.state.menu_service.create_menu_item(payload)
        return ApiResponse(code=201, data=item, msg="Menu item created")

    @app.get("/menu/{item_id}", response_model=ApiResponse[MenuItem], tags=["Menu"])
    async def get_menu_item(item_id: str) -> ApiResponse[MenuItem]:
        """Get a single dish."""
        item = await app.state.menu_service.get_menu_item(item_id)
        return ApiResponse(code=200, data=item, msg="Menu item loaded")

    @app.put("/menu/{item_id}", response_model=ApiResponse[MenuItem], tags=["Menu Admin"])
    async def update_menu_item(
        item_id: str,
        payload: MenuItemUpdate,
        _api_key: str | None = Depends(require_admin_key),
    ) -> ApiResponse[MenuItem]:
        """Partially update a dish."""
        item = await app.state.menu_service.update_menu_item(item_id, payload)
        return ApiResponse(code=200, data=item, msg="Menu item updated")

    @app.delete("/menu/{item_id}", response_model=ApiResponse[None], tags=["Menu Admin"])
    async def delete_menu_item(
        item_id: str,
        _api_key: str | None = Depends(require_admin_key),
    ) -> ApiResponse[None]:
        """Delete a dish."""
        await app.state.menu_service.delete_menu_item(item_id)
        return ApiResponse(code=200, data=None, msg="Menu item deleted")

    # Orders

    @app.get("/orders", response_model=ApiResponse[list[Order]], tags=["Orders"])
    async def list_orders() -> ApiResponse[list[Order]]:
        """List the 50 most recent orders, newest first."""
        orders = await app.state.order_service.list_recent_orders()
        return ApiResponse(code=200, data=orders, msg="Orders loaded")

    @app.post("/orders", response_model=ApiResponse[OrderReceipt], status_code=201, tags=["Orders"])
    async def place_order(payload: OrderCreateRequest) -> ApiResponse[OrderReceipt]:
        """Place an order from a cart."""
        receipt = await app.state.order_service.place_order(payload)
        return ApiResponse(code=201, data=receipt, msg="Order placed")

    # Uploads

    @app.post("/upload", response_model=ApiResponse[UploadResult], tags=["Uploads"])
    async def upload_image(
        file: UploadFile | None = File(None),
        _api_key: str | None = Depends(require_admin_key),
    ) -> ApiResponse[UploadResult]:
        """Upload a dish image and get back its public URL."""
        service: ImageUploadService = app.state.upload_service
        if file is None:
            result = await service.store_image(content_type=None, data=None)
        else:
            # one byte past the limit is enough to reject oversized files
            data = await file.read(service.max_bytes + 1)
            result = await service.store_image(content_type=file.content_type, data=data)
        return ApiResponse(code=200, data=result, msg="Upload succeeded")

    # Posts

    @app.get("/posts", response_model=ApiResponse[list[Post]], tags=["Posts"])
    async def list_posts() -> ApiResponse[list[Post]]:
        """List every post, newest first."""
        posts = await app.state.post_service.list_posts()
        return ApiResponse(code=200, data=posts, msg="Posts loaded")

    @app.post("/posts", response_model=ApiResponse[Post], status_code=201, tags=["Posts"])
    async def create_post(payload: PostInput) -> ApiResponse[Post]:
        """Create a post."""
        post = await app.state.post_service.create_post(payload)
        return ApiResponse(code=201, data=post, msg="Post created")

    @app.get("/posts/{post_id}", response_model=ApiResponse[Post], tags=["Posts"])
    async def get_post(post_id: str) -> ApiResponse[Post]:
        """Get a single post."""
        post = await app.state.post_service.get_post(post_id)
        return ApiResponse(code=200, data=post, msg="Post loaded")

    @app.put("/posts/{post_id}", response_model=ApiResponse[Post], tags=["Posts"])
    async def update_post(post_id: str, payload: PostInput) -> ApiResponse[Post]:
        """Replace a post's title and content."""
        post = await app.state.post_service.update_post(post_id, payload)
        return ApiResponse(code=200, data=post, msg="Post updated")

    @app.delete("/posts/{post_id}", response_model=ApiResponse[None], tags=["Posts"])
    async def delete_post(post_id: str) -> ApiResponse[None]:
        """Delete a post."""
        await app.state.post_service.delete_post(post_id)
        return ApiResponse(code=200, data=None, msg="Post deleted")

    app.mount(
        upload_service.url_prefix,
        StaticFiles(directory=upload_service.upload_dir),
        name="uploads",
    )

    return app
