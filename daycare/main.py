from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from sqlalchemy.future import select
from starlette.middleware.sessions import SessionMiddleware

import daycare.models  # registers all models via models/__init__.py
from daycare.api import (
    children_routes,
    classroom_routes,
    daily_report_routes,
    dashboard_routes,
    parent_routes,
    profile_routes,
    ratio_routes,
    staff_routes,
)
from daycare.auth import routes as auth_routes
from daycare.core.config import settings
from daycare.db import async_session, create_db_and_tables
from daycare.models.user_profile import UserProfile

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)


async def seed_director():
    """Create a director profile from SEED_DIRECTOR_PIN when the center has none."""
    if not settings.seed_director_pin:
        return
    async with async_session() as db:
        result = await db.execute(select(UserProfile).where(UserProfile.role == "director"))
        if result.scalars().first():
            log.info("director already exists, no seed needed")
            return
        director = UserProfile(
            first_name="Center",
            last_name="Director",
            role="director",
            pin_code=settings.seed_director_pin,
            is_active=True,
        )
        db.add(director)
        await db.commit()
        log.info("default director created: id=%s", director.id)


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("starting DB setup")
    await create_db_and_tables()
    await seed_director()
    yield


app = FastAPI(lifespan=lifespan)

# Session middleware (required for PIN login sessions)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    max_age=settings.session_max_age_seconds,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Daycare Center API",
        version="1.0.0",
        description="API for classrooms, attendance, and staff-to-child ratio tracking.",
        routes=app.routes,
    )
    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "SessionCookie": {"type": "apiKey", "in": "cookie", "name": "session"}
    }
    for path in openapi_schema["paths"].values():
        for operation in path.values():
            operation["security"] = [{"SessionCookie": []}]
    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi


@app.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}


app.include_router(auth_routes.router)
app.include_router(profile_routes.router)
app.include_router(children_routes.router)
app.include_router(parent_routes.router)
app.include_router(classroom_routes.router)
app.include_router(staff_routes.router)
app.include_router(ratio_routes.router)
app.include_router(daily_report_routes.router)
app.include_router(dashboard_routes.router)
