"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from galley.api import auth, inventory, meal_plans, meals, provisioning_lists, recipes
from galley.config import get_settings
from galley.database import Database
from galley.services.recipe_search import RecipeSearchError

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database handle on startup and dispose it on shutdown."""
    database = Database(settings.database_url)
    app.state.database = database
    logger.info(f"Starting Galley Provisioner in {settings.environment} mode")
    yield
    database.dispose()


app = FastAPI(
    title="Galley Provisioner API",
    description="Inventory, meal planning and provisioning lists for households and yachts",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(RecipeSearchError)
async def recipe_search_error_handler(request: Request, exc: RecipeSearchError):
    """Recipe search failures surface as generic internal errors."""
    logger.error(f"Recipe search failed for {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Log unexpected errors and answer without leaking details."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# Register routers
app.include_router(auth.router)
app.include_router(inventory.router)
app.include_router(provisioning_lists.router)
app.include_router(meals.router)
app.include_router(meal_plans.router)
app.include_router(recipes.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
