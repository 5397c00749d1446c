# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Itemstack API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.dependencies import get_item_store
from app.exceptions import (
    ItemstackException,
    itemstack_exception_handler,
    validation_exception_handler,
)
from app.routers import health, items
from app.websocket import routes as websocket_routes
from app.websocket import websocket_manager

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: Log configuration, build the item store
    - Shutdown: Log open WebSocket connections being dropped
    """
    logger.info(f"Starting Itemstack API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list if settings.is_production else ['*']}")

    store = get_item_store()
    logger.info(f"Item store: {store.name}")

    yield

    logger.info(
        f"Shutting down Itemstack API "
        f"({websocket_manager.get_connection_count()} WebSocket connections open)"
    )


# Create FastAPI application
app = FastAPI(
    title="Itemstack API",
    description="""
## Item CRUD API

A small REST backend for a list-of-items frontend.

### Endpoints

| Method | Path | Description |
|--------|------|-------------|
| GET | `/items` | List items |
| POST | `/items` | Create an item |
| GET | `/items/{id}` | Get one item |
| PUT | `/items/{id}` | Rename an item |
| DELETE | `/items/{id}` | Delete an item (missing ids are a no-op) |

The same routes are also served under `/api/v1/items`.

### Storage

- `ITEM_STORE=memory` (default): process-local, resets on restart
- `ITEM_STORE=supabase`: PostgreSQL `items` table in Supabase

### Quick Start

```bash
# 1. Create an item
curl -X POST http://localhost:8000/items \\
  -H "Content-Type: application/json" \\
  -d '{"name": "Buy milk"}'

# 2. List items
curl http://localhost:8000/items

# 3. Delete it
curl -X DELETE http://localhost:8000/items/1
```
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Items",
            "description": "Create, list, rename and delete items",
        },
        {
            "name": "WebSocket",
            "description": "Real-time item change feed",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - wildcard outside production so a local frontend dev
# server on any port can call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=settings.is_production,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Total-Count"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(ItemstackException)
async def handle_itemstack_exception(request: Request, exc: ItemstackException):
    """Handle custom Itemstack exceptions."""
    return await itemstack_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies, paths and query parameters."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Item endpoints at the paths the frontend calls
app.include_router(
    items.router,
    prefix="/items",
    tags=["Items"],
    include_in_schema=False,
)

# Versioned item endpoints
app.include_router(
    items.router,
    prefix="/api/v1/items",
    tags=["Items"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# WebSocket endpoints (Real-time updates)
app.include_router(
    websocket_routes.router,
    tags=["WebSocket"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Itemstack API",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/v1/health",
        "items": "/items",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
