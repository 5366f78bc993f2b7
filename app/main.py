# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the $1 Startup API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    OneDollarException,
    onedollar_exception_handler,
    supabase_exception_handler,
    validation_exception_handler,
)
from app.routers import health, applications, landing
from app.auth import routes as auth_routes
from app.websocket import routes as websocket_routes
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

    Logs startup configuration and shutdown.
    """
    logger.info(f"Starting $1 Startup API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"Applications open: {settings.APPLICATIONS_OPEN}")

    yield

    logger.info("Shutting down $1 Startup API")


# Create FastAPI application
app = FastAPI(
    title="$1 Startup API",
    description="""
## Application intake for the $1 Startup series

Vibe coders build startups live on camera, from zero to first dollar of revenue.
This API backs the landing page and its application form.

### How It Works

1. **Read the page** - `GET /api/v1/landing` returns copy and live stats
2. **Sign up / sign in** - password auth through Supabase Auth
3. **Apply** - `POST /api/v1/applications` (one application per email)
4. **Check status** - `GET /api/v1/applications/check?email=...`

### Quick Start

```bash
curl -X POST http://localhost:8000/api/v1/applications \\
  -H "Content-Type: application/json" \\
  -d '{"name": "Jane Doe", "email": "jane@example.com", "twitterHandle": "@jane",
       "experience": "vibe-coder", "projectIdea": "...", "whyYou": "..."}'
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Password sign-in/sign-up and token verification",
        },
        {
            "name": "Applications",
            "description": "Submit applications and check their status",
        },
        {
            "name": "Landing",
            "description": "Landing page content",
        },
        {
            "name": "WebSocket",
            "description": "Live application stats",
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

@app.exception_handler(OneDollarException)
async def handle_onedollar_exception(request: Request, exc: OneDollarException):
    """Handle custom API exceptions."""
    return await onedollar_exception_handler(request, exc)


@app.exception_handler(SupabaseClientError)
async def handle_supabase_exception(request: Request, exc: SupabaseClientError):
    """Handle datastore and auth provider failures."""
    logger.error(f"Datastore error on {request.url.path}: {exc}")
    return await supabase_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle request body and query validation errors."""
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

app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

app.include_router(
    applications.router,
    prefix="/api/v1/applications",
    tags=["Applications"]
)

app.include_router(
    landing.router,
    prefix="/api/v1",
    tags=["Landing"]
)

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
        "name": "$1 Startup API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
