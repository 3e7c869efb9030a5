from app.database.database import create_db_and_tables
from app.utils.logger import setup_logging
from contextlib import asynccontextmanager
from app.core.config import get_settings, parse_comma_separated_origins
from app.core.error_handlers import register_exception_handlers
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.internal import admin
from app.routers import (
    auth,
    favorite,
    idea,
    organisation,
    partner,
    profile,
    registration,
    volunteer,
)
from app.core.telemetry import setup_telemetry


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Perform application startup tasks before the FastAPI app begins serving requests.

    Runs logging setup, creates the database and tables, and initializes telemetry using the provided FastAPI application.
    """
    setup_logging()
    create_db_and_tables()
    setup_telemetry(app)
    yield


app = FastAPI(
    title="Hearty API",
    description="RESTful API connecting volunteers, business partners and care facilities",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        str(origin)
        for origin in parse_comma_separated_origins(get_settings().BACKEND_CORS_ORIGINS)
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/health", include_in_schema=False)
def health_check():
    """
    Provide the application's liveness state for health checks.

    Returns:
        dict: A mapping with key "status" and value "ok" indicating the service is healthy.
    """
    return {"status": "ok"}


app.include_router(auth.router)
app.include_router(registration.router)
app.include_router(profile.router)
app.include_router(partner.router)
app.include_router(volunteer.router)
app.include_router(favorite.router)
app.include_router(idea.router)
app.include_router(organisation.router)
app.include_router(admin.router)
