"""
Barangay Hub API Server

REST API behind the barangay administrative console: residents,
households, officials, ordinances, activities, reports and settings.
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from barangay.database import get_store
from barangay.errors import (
    AuthenticationError,
    DuplicateKeyError,
    GatewayReadError,
    GatewayWriteError,
    InvalidFieldError,
    NotAuthenticatedError,
    RecordNotFoundError,
)
from .config import get_cors_origins, get_settings
from .routers import (
    activities,
    auth,
    dashboard,
    health,
    households,
    officials,
    ordinances,
    reports,
    residents,
    settings,
)

# Configure logging
logging.basicConfig(
    level=os.getenv('LOG_LEVEL', 'INFO'),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# ============================================
# Application Lifespan
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown"""
    logger.info("Starting Barangay Hub API")

    # Verify database connection on startup
    try:
        app_settings = app.dependency_overrides.get(get_settings, get_settings)()
        logging.getLogger().setLevel(app_settings.log_level)
        get_store(app_settings.database_url)
        logger.info("Database connected")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")

    yield

    logger.info("Shutting down Barangay Hub API")


# ============================================
# FastAPI Application
# ============================================

app = FastAPI(
    title="Barangay Hub API",
    description="""
    Administrative console API for a barangay.

    ## Overview

    Residents, households, officials, ordinances, activities, reports and
    console settings. Households are grouped on the fly from residents
    sharing a house number, merged with the household records that carry
    utilities and monthly income.

    ## Authentication

    Sign in with **POST /auth/sign-in** and send the returned token as
    `Authorization: Bearer <token>`. Every route outside `/auth` and
    `/health` requires it.

    ## Endpoints

    - **GET /** - Dashboard summary
    - **/residents** - Resident registry
    - **/households** - Household views, records and CSV export
    - **/officials** - Officials and duty time-in/time-out
    - **/ordinances** - Ordinances
    - **/activities** - Community activities
    - **/reports** - Resident reports
    - **/settings** - Console settings
    """,
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(health.router)
app.include_router(dashboard.router)
app.include_router(residents.router)
app.include_router(households.router)
app.include_router(officials.router)
app.include_router(ordinances.router)
app.include_router(activities.router)
app.include_router(reports.router)
app.include_router(settings.router)


# ============================================
# Error Handlers
# ============================================

@app.exception_handler(InvalidFieldError)
async def invalid_field_handler(request: Request, exc: InvalidFieldError):
    return JSONResponse(status_code=422, content={"detail": exc.message, "field": exc.field})


@app.exception_handler(NotAuthenticatedError)
async def not_authenticated_handler(request: Request, exc: NotAuthenticatedError):
    return JSONResponse(
        status_code=401,
        content={"detail": exc.message},
        headers={"WWW-Authenticate": "Bearer"}
    )


@app.exception_handler(AuthenticationError)
async def authentication_handler(request: Request, exc: AuthenticationError):
    return JSONResponse(
        status_code=401,
        content={"detail": exc.message},
        headers={"WWW-Authenticate": "Bearer"}
    )


@app.exception_handler(RecordNotFoundError)
async def not_found_handler(request: Request, exc: RecordNotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(DuplicateKeyError)
async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
    return JSONResponse(status_code=409, content={"detail": exc.message})


@app.exception_handler(GatewayWriteError)
async def write_error_handler(request: Request, exc: GatewayWriteError):
    return JSONResponse(status_code=500, content={"detail": exc.message})


@app.exception_handler(GatewayReadError)
async def read_error_handler(request: Request, exc: GatewayReadError):
    return JSONResponse(status_code=503, content={"detail": exc.message, "retryable": True})


@app.exception_handler(StarletteHTTPException)
async def unknown_route_handler(request: Request, exc: StarletteHTTPException):
    """Catch-all for paths no route matches"""
    if exc.status_code == 404 and exc.detail == "Not Found":
        return JSONResponse(
            status_code=404,
            content={"detail": "Page not found", "path": request.url.path}
        )
    return await http_exception_handler(request, exc)


# ============================================
# Run with: uvicorn api.main:app --port 8000
# ============================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
