# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the App Catalog API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.exceptions import (
    CatalogException,
    catalog_exception_handler,
    http_exception_handler,
    supabase_exception_handler,
    validation_exception_handler,
)
from app.routers import health, apps, ratings, search, categories
from app.auth import routes as auth_routes
from lib.supabase_client import SupabaseClientError

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

    Logs startup configuration and shutdown. Clients are built per request,
    so there is nothing to open or close here.
    """
    logger.info(f"Starting App Catalog API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"Slug rename policy: {settings.SLUG_RENAME_POLICY}")

    yield

    logger.info("Shutting down App Catalog API")


# Create FastAPI application
app = FastAPI(
    title="App Catalog API",
    description="""
## Browse, search and rate apps

A catalog of apps backed by Supabase (Postgres, Auth and row-level security).

### How It Works

1. **Browse** - List published apps, filter by category or featured, page through results
2. **Search** - Case-insensitive substring search across names and descriptions
3. **View** - Fetch an app by id or slug with its average rating
4. **Rate** - Signed-in users leave a 1-5 star rating and an optional review
5. **Publish** - Developers create apps as drafts and publish when ready

### Authentication

Send the Supabase access token as `Authorization: Bearer <token>`.
Reads work anonymously; writes need a token, and only an app's developer
may update or delete it.

### Quick Start

```bash
# List apps
curl http://localhost:8000/api/v1/apps?search=widget

# Rate an app
curl -X POST http://localhost:8000/api/v1/apps/{id}/rate \\
  -H "Authorization: Bearer $TOKEN" \\
  -H "Content-Type: application/json" \\
  -d '{"rating": 5, "review": "Great"}'
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Inspect the identity carried by a Supabase access token",
        },
        {
            "name": "Apps",
            "description": "List, view, create, update and delete apps",
        },
        {
            "name": "Ratings",
            "description": "Star ratings and reviews",
        },
        {
            "name": "Search",
            "description": "Free-text app search",
        },
        {
            "name": "Categories",
            "description": "App categories",
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

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(CatalogException, catalog_exception_handler)
app.add_exception_handler(SupabaseClientError, supabase_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": str(exc) or "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# App catalog endpoints
app.include_router(
    apps.router,
    prefix="/api/v1/apps",
    tags=["Apps"]
)

# Rating endpoints (nested under apps)
app.include_router(
    ratings.router,
    prefix="/api/v1/apps",
    tags=["Ratings"]
)

# Search endpoint
app.include_router(
    search.router,
    prefix="/api/v1/search",
    tags=["Search"]
)

# Category endpoints
app.include_router(
    categories.router,
    prefix="/api/v1/categories",
    tags=["Categories"]
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
        "name": "App Catalog API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
