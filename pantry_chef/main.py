import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from pantry_chef.config import Settings, get_settings
from pantry_chef.database import Database
from pantry_chef.exceptions import NotFoundError
from pantry_chef.routers import dashboard, inventory, preferences, recipes, shopping
from pantry_chef.services.recipe_ai import RecipeAI

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    database: Database | None = None,
    recipe_ai: RecipeAI | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = database or Database(settings.DATABASE_URL)
        db.create_all()
        app.state.db = db
        logger.info("Pantry Chef started")
        try:
            yield
        finally:
            db.dispose()

    app = FastAPI(
        title="Pantry Chef API",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.recipe_ai = recipe_ai or RecipeAI(settings)

    # Build allowed origins list (supports comma-separated FRONTEND_URL for multiple domains)
    origins = ["http://localhost:3000"]
    for origin in settings.FRONTEND_URL.split(","):
        origin = origin.strip()
        if origin and origin not in origins:
            origins.append(origin)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"error": exc.message})

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": "Database error"})

    app.include_router(dashboard.router, prefix="/api/v1/dashboard", tags=["Dashboard"])
    app.include_router(inventory.router, prefix="/api/v1/inventory", tags=["Inventory"])
    app.include_router(recipes.router, prefix="/api/v1/recipes", tags=["Recipes"])
    app.include_router(shopping.router, prefix="/api/v1/shopping-list", tags=["Shopping List"])
    app.include_router(preferences.router, prefix="/api/v1/preferences", tags=["Preferences"])

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
