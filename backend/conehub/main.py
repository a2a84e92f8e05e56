"""
Conehub backend: team registration / check-in for the duty scheduler.

The store is picked from settings at startup (SQL via SQLAlchemy or the
hosted REST store) and injected into TeamService; routers get the service
from app.state.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from conehub.core.config import Settings
from conehub.core.logging import setup_logging
from conehub.core.seed import seed_demo_teams
from conehub.db.database import make_engine
from conehub.repository.base import TeamStore
from conehub.repository.rest import make_rest_team_store
from conehub.repository.teams import make_sql_team_store
from conehub.routers.teams import router as teams_router
from conehub.services.teams import TeamService, make_team_service

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> TeamStore:
    settings.validate()
    if settings.store_backend == "rest":
        return make_rest_team_store(
            settings.store_url, settings.store_key, settings.store_timeout
        )
    return make_sql_team_store(make_engine(settings.database_url))


def create_app(
    settings: Settings | None = None,
    team_service: TeamService | None = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned_store: TeamStore | None = None
        if getattr(app.state, "team_service", None) is None:
            owned_store = build_store(settings)
            app.state.team_service = make_team_service(
                owned_store,
                store_timeout=settings.store_timeout,
                max_list_limit=settings.max_list_limit,
                require_password_on_delete=settings.require_password_on_delete,
            )
            logger.info("Team store ready (%s)", settings.store_backend)

        if settings.seed_demo_teams:
            await seed_demo_teams(app.state.team_service.store)

        yield

        if owned_store is not None:
            await owned_store.aclose()
        logger.info("Conehub backend shutting down")

    app = FastAPI(title="Conehub Backend", lifespan=lifespan)
    app.state.team_service = team_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(teams_router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
