from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from ..errors import OwnerReferenceError, StorageError, ValidationError
from ..services.owner_svc import OwnerService
from ..services.pet_svc import PetService
from .deps import owner_service, pet_service

router = APIRouter()


class PetCreate(BaseModel):
    owner_id: int
    name: str
    species: str


@router.get("/api/pets/owner-phone")
def api_pet_owner_phone(name: str = Query(""), owners: OwnerService = Depends(owner_service)):
    try:
        phone = owners.search_owner_phone_by_pet_name(name)
    except StorageError as se:
        raise HTTPException(status_code=500, detail=str(se))
    pet_name = name.strip()
    if phone is None:
        raise HTTPException(status_code=404, detail=f"pet {pet_name} not found")
    return {"pet_name": pet_name, "phone": phone}


@router.post("/api/pets", status_code=201)
def api_pet_create(body: PetCreate, pets: PetService = Depends(pet_service)):
    try:
        pets.add_pet(body.name, body.owner_id, body.species)
        return [p.to_dict() for p in pets.get_pets()]
    except ValidationError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    except OwnerReferenceError as oe:
        raise HTTPException(status_code=404, detail=str(oe))
    except StorageError as se:
        raise HTTPException(status_code=500, detail=str(se))


@router.get("/api/pets")
def api_pet_list(pets: PetService = Depends(pet_service)):
    try:
        return [p.to_dict() for p in pets.get_pets()]
    except StorageError as se:
        raise HTTPException(status_code=500, detail=str(se))
