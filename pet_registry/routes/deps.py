from __future__ import annotations

from fastapi import Request

from ..services.owner_svc import OwnerService
from ..services.pet_svc import PetService


def owner_service(request: Request) -> OwnerService:
    return request.app.state.owners


def pet_service(request: Request) -> PetService:
    return request.app.state.pets


def db_path(request: Request) -> str:
    return request.app.state.db_path
