"""
FastAPI app factory aggregating the owner, pet and history routers.
Run with `uvicorn --factory pet_registry.api:create_app`.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .db import get_db_path
from .services.owner_svc import OwnerService
from .services.pet_svc import PetService
from .services.schema_svc import ensure_registry_schema
from .routes import base as base_routes
from .routes import history as history_routes
from .routes import owners as owners_routes
from .routes import pets as pets_routes


def create_app(db_path: str | None = None) -> FastAPI:
    """Build the app against ``db_path`` (resolved from env/config.yaml when omitted).

    Nothing touches the database until the app starts up.
    """
    path = db_path or get_db_path()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        ensure_registry_schema(path)
        yield

    app = FastAPI(title="pet-registry-api", version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.db_path = path
    app.state.owners = OwnerService(path)
    app.state.pets = PetService(path)

    app.include_router(base_routes.router)
    app.include_router(owners_routes.router)
    app.include_router(pets_routes.router)
    app.include_router(history_routes.router)
    return app
