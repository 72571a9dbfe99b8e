"""
Main application entry point.

This module initializes the FastAPI application and includes all routers.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from budget_server.core.config import settings
from budget_server.core.exceptions import BudgetServerError
from budget_server.core.logging import logger
from budget_server.core.middleware import SecurityHeadersMiddleware, RequestLoggingMiddleware
from budget_server.db.session import create_tables
from budget_server.routers.budgets import router as budgets_router
from budget_server.routers.categories import router as categories_router
from budget_server.routers.health import router as health_router
from budget_server.routers.sessions import router as sessions_router
from budget_server.routers.transactions import router as transactions_router
from budget_server.routers.users import router as users_router
from budget_server.schemas.base import ErrorResponse


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown actions."""
    logger.info(f"Starting {settings.api.title}")
    logger.info(f"Environment: {settings.environment.value}")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"Database URL: {settings.database.url[:20]}...")

    if settings.database.create_tables:
        await create_tables()

    logger.info(f"API Docs available at: http://{settings.api.host}:{settings.api.port}/docs")
    yield
    logger.info(f"Shutting down {settings.api.title}")


app = FastAPI(
    lifespan=lifespan,
    title=settings.api.title,
    description=settings.api.description,
    version=settings.api.version,
    debug=settings.debug,
)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.frontend_urls,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)


@app.exception_handler(BudgetServerError)
async def budget_server_error_handler(request: Request, exc: BudgetServerError) -> JSONResponse:
    """Render application errors as ``{"message": ...}``."""
    logger.debug(f"{request.method} {request.url.path} failed with {exc.status_code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(message=exc.message).model_dump(),
        headers=exc.headers,
    )


app.include_router(health_router, prefix="/health", tags=["health"])
app.include_router(users_router, prefix="/users", tags=["users"])
app.include_router(sessions_router, prefix="/sessions", tags=["sessions"])
app.include_router(budgets_router, prefix="/budgets", tags=["budgets"])
app.include_router(categories_router, prefix="/categories", tags=["categories"])
app.include_router(transactions_router, prefix="/transactions", tags=["transactions"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": settings.api.title,
        "version": settings.api.version,
        "docs": "/docs",
    }
