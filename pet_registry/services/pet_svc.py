from __future__ import annotations

import logging

from ..audit import ENTITY_PET, RESULT_ERROR, RESULT_OK, ChangeRecorder
from ..db import get_conn, transaction
from ..domain.records import Pet
from ..errors import OwnerReferenceError, RegistryError
from ..repository import owner_repo, pet_repo
from .utils import record_change, require_int, require_text

logger = logging.getLogger(__name__)


class PetService:
    """Pet records: create and list."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    def add_pet(self, name: str, owner_id: int, species: str) -> Pet:
        """
        Insert a new pet for an existing owner.

        Raises:
            ValidationError: name or species empty, owner_id not an integer
            OwnerReferenceError: no owner has ``owner_id``
        """
        rec = ChangeRecorder(self.db_path, "ADD_PET", ENTITY_PET)
        try:
            name = require_text(name, "name")
            species = require_text(species, "species")
            owner_id = require_int(owner_id, "owner_id")
            with get_conn(self.db_path) as conn:
                with transaction(conn):
                    if not owner_repo.exists(conn, owner_id):
                        raise OwnerReferenceError(f"no owner with id {owner_id}")
                    pet_id = pet_repo.insert_pet(conn, owner_id, name, species)
                pet = Pet.from_row(pet_repo.get_one(conn, pet_id))
        except RegistryError as e:
            record_change(rec, RESULT_ERROR, str(e))
            raise
        rec.bind(pet.id)
        rec.note(owner_id=pet.owner_id, name=pet.name, species=pet.species)
        record_change(rec, RESULT_OK)
        logger.info("pet %s added for owner %s", pet.id, owner_id)
        return pet

    def get_pets(self) -> list[Pet]:
        with get_conn(self.db_path) as conn:
            return [Pet.from_row(r) for r in pet_repo.list_all(conn)]

    def get_pets_by_owner(self, owner_id: int) -> list[Pet]:
        owner_id = require_int(owner_id, "owner_id")
        with get_conn(self.db_path) as conn:
            if not owner_repo.exists(conn, owner_id):
                raise OwnerReferenceError(f"no owner with id {owner_id}")
            return [Pet.from_row(r) for r in pet_repo.list_by_owner(conn, owner_id)]

    def count(self) -> int:
        with get_conn(self.db_path) as conn:
            return pet_repo.count_all(conn)
