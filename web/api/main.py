"""FastAPI league API - serves standings, reporting, admin and settings endpoints."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from league.models.base import async_session_factory, init_db
from league.services.roster import ensure_initial_admin

from web.api.routes import router as api_router
from web.api.admin_routes import router as admin_router
from web.api.auth_routes import router as auth_router
from web.api.settings_routes import router as settings_router

logger = logging.getLogger("golfligan.api")


async def setup_database() -> None:
    """Create tables and the configured initial admin player."""
    await init_db()
    async with async_session_factory() as session:
        admin = await ensure_initial_admin(session)
        if admin:
            logger.info("Initial admin player: %s", admin.name)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await setup_database()
    yield


app = FastAPI(title="Golfligan API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(api_router)
app.include_router(admin_router)
app.include_router(auth_router)
app.include_router(settings_router)


@app.get("/api/health")
async def health():
    return {"status": "ok"}
