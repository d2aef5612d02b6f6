from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..domain.records import PhoneUpdateStatus
from ..errors import ConflictError, OwnerReferenceError, StorageError, ValidationError
from ..services.owner_svc import OwnerService
from ..services.pet_svc import PetService
from .deps import owner_service, pet_service

router = APIRouter()


class OwnerCreate(BaseModel):
    name: str
    phone: str
    address: str


class PhoneUpdateBody(BaseModel):
    old_phone: str
    new_phone: str


_PHONE_UPDATE_HTTP_STATUS = {
    PhoneUpdateStatus.MISSING_INPUT: 400,
    PhoneUpdateStatus.NOT_FOUND: 404,
    PhoneUpdateStatus.PHONE_IN_USE: 409,
    PhoneUpdateStatus.NOT_UPDATED: 409,
}


@router.post("/api/owners", status_code=201)
def api_owner_create(body: OwnerCreate, owners: OwnerService = Depends(owner_service)):
    try:
        owners.add_owner(body.name, body.phone, body.address)
        return [o.to_dict() for o in owners.get_owners()]
    except ValidationError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    except ConflictError as ce:
        raise HTTPException(status_code=409, detail=str(ce))
    except StorageError as se:
        raise HTTPException(status_code=500, detail=str(se))


@router.get("/api/owners")
def api_owner_list(owners: OwnerService = Depends(owner_service)):
    try:
        return [o.to_dict() for o in owners.get_owners()]
    except StorageError as se:
        raise HTTPException(status_code=500, detail=str(se))


@router.post("/api/owners/phone")
def api_owner_phone_update(body: PhoneUpdateBody, owners: OwnerService = Depends(owner_service)):
    try:
        res = owners.update_phone(body.old_phone, body.new_phone)
    except StorageError as se:
        raise HTTPException(status_code=500, detail=str(se))
    if not res.ok:
        raise HTTPException(status_code=_PHONE_UPDATE_HTTP_STATUS[res.status], detail=res.message)
    return {"status": res.status.value, "message": res.message}


@router.get("/api/owners/{owner_id}")
def api_owner_get(owner_id: int, owners: OwnerService = Depends(owner_service)):
    try:
        return owners.get_owner(owner_id).to_dict()
    except OwnerReferenceError as oe:
        raise HTTPException(status_code=404, detail=str(oe))
    except StorageError as se:
        raise HTTPException(status_code=500, detail=str(se))


@router.get("/api/owners/{owner_id}/pets")
def api_owner_pets(owner_id: int, pets: PetService = Depends(pet_service)):
    try:
        return [p.to_dict() for p in pets.get_pets_by_owner(owner_id)]
    except OwnerReferenceError as oe:
        raise HTTPException(status_code=404, detail=str(oe))
    except StorageError as se:
        raise HTTPException(status_code=500, detail=str(se))
