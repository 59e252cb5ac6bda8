"""Main FastAPI application."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes import router
from config.settings import settings
from models.database import (
    close_mongo_connection,
    get_meal_plans_collection,
    get_profiles_collection,
    get_timetables_collection,
    init_mongo,
)
from models.stores import (
    InMemoryPlanStore,
    InMemoryProfileStore,
    MongoPlanStore,
    MongoProfileStore,
)
from schemas.meal_plan import MealPlan
from schemas.timetable import Timetable
from services.content_generator import ContentGenerator
from services.errors import (
    GenerationError,
    NotFoundError,
    ProfileValidationError,
    StorageError,
)
from services.plan_orchestrator import PlanOrchestrator
from utils.logger import setup_logger

logger = setup_logger(__name__)


async def build_orchestrator() -> PlanOrchestrator:
    """Create stores for the configured backend plus the content generator."""
    backend = settings.storage_backend.lower()
    if backend == "mongo":
        await init_mongo()
        profile_store = MongoProfileStore(get_profiles_collection())
        meal_plan_store = MongoPlanStore(get_meal_plans_collection(), MealPlan, "meal plan")
        timetable_store = MongoPlanStore(get_timetables_collection(), Timetable, "timetable")
    elif backend == "memory":
        max_records = settings.memory_store_max_records
        profile_store = InMemoryProfileStore(max_records=max_records)
        meal_plan_store = InMemoryPlanStore(MealPlan, "meal plan", max_records=max_records)
        timetable_store = InMemoryPlanStore(Timetable, "timetable", max_records=max_records)
    else:
        raise ValueError(f"Unknown storage backend '{settings.storage_backend}'")

    logger.info(f"Using {backend} storage backend")
    return PlanOrchestrator(
        profile_store=profile_store,
        meal_plan_store=meal_plan_store,
        timetable_store=timetable_store,
        generator=ContentGenerator.from_settings(),
        serialize_per_user=settings.serialize_plan_generation,
    )


def create_app(orchestrator: Optional[PlanOrchestrator] = None) -> FastAPI:
    """Build the application; tests pass a ready orchestrator."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup/shutdown events."""
        logger.info("Starting application...")
        if getattr(app.state, "orchestrator", None) is None:
            app.state.orchestrator = await build_orchestrator()
        logger.info("Application started successfully")

        yield

        logger.info("Shutting down application...")
        await close_mongo_connection()
        logger.info("Application shut down")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Holistic meal plan and daily timetable generation",
        lifespan=lifespan,
    )
    app.state.orchestrator = orchestrator

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(ProfileValidationError)
    async def validation_handler(request: Request, exc: ProfileValidationError):
        logger.info(f"Rejected profile data: {exc.details}")
        return JSONResponse(
            status_code=400,
            content={"error": str(exc), "details": jsonable_encoder(exc.details)},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        if request.url.path == "/api/profile":
            error = "Invalid profile data"
        else:
            error = "Invalid request"
        details = exc.errors()
        logger.info(f"Rejected request body on {request.url.path}: {details}")
        return JSONResponse(
            status_code=400,
            content={"error": error, "details": jsonable_encoder(details)},
        )

    @app.exception_handler(GenerationError)
    async def generation_handler(request: Request, exc: GenerationError):
        logger.error(f"Error generating plan: {exc}")
        return JSONResponse(status_code=502, content={"error": "Failed to generate plan"})

    @app.exception_handler(StorageError)
    async def storage_handler(request: Request, exc: StorageError):
        logger.error(f"Storage error on {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": "Storage unavailable"})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error(f"Unexpected error on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    app.include_router(router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": f"{settings.app_name} API",
            "version": settings.app_version,
            "status": "running",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": settings.app_name,
            "storage": settings.storage_backend,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
