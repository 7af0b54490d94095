from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logfire

from slotkeeper.config import settings
from slotkeeper.database import init_db, close_db
from slotkeeper.exceptions import SlotkeeperError
from slotkeeper.scheduling.availability import get_availability
from slotkeeper.api import api_router
import slotkeeper.models  # noqa: F401  registers tables on Base.metadata

# Initialize Logfire - auto-instruments FastAPI
if settings.logfire_token:
    logfire.configure(
        token=settings.logfire_token,
        service_name="slotkeeper",
        environment=settings.app_env,
        console=False,  # Disable console logging (too verbose)
    )
    print("✅ Logfire initialized")
else:
    print("⚠️ Logfire token not set - observability disabled")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup - a bad availability config is fatal here
    print("🚀 Starting Slotkeeper API...")
    availability = get_availability()
    print(f"✅ Availability loaded: {', '.join(availability.weekday_labels)} "
          f"{availability.business_start_hour}:00-{availability.business_end_hour}:00, "
          f"{availability.slot_duration_minutes} min slots ({availability.timezone})")
    await init_db()
    print("✅ Database initialized")

    yield

    # Shutdown
    print("👋 Shutting down...")
    await close_db()
    print("✅ Database connections closed")


app = FastAPI(
    title=settings.app_name,
    description="Appointment slot booking against a weekly availability template",
    version="1.0.0",
    lifespan=lifespan,
)

# Instrument FastAPI with Logfire
if settings.logfire_token:
    logfire.instrument_fastapi(app)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SlotkeeperError)
async def slotkeeper_error_handler(request: Request, exc: SlotkeeperError):
    """Render domain errors with their HTTP status."""
    if exc.status_code >= 500:
        logfire.error("request_failed", path=request.url.path, error=exc.code, detail=exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.code},
    )


# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": "1.0.0",
    }


@app.get("/health")
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "database": "connected",
        "timezone": settings.timezone,
    }
