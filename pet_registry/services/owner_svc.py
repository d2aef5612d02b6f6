from __future__ import annotations

import logging
import sqlite3

from ..audit import ENTITY_OWNER, RESULT_ERROR, RESULT_OK, RESULT_REJECTED, ChangeRecorder
from ..db import get_conn, transaction
from ..domain.records import Owner, PhoneUpdate, PhoneUpdateStatus
from ..errors import ConflictError, OwnerReferenceError, RegistryError
from ..repository import owner_repo
from .utils import record_change, require_int, require_text

logger = logging.getLogger(__name__)


class OwnerService:
    """Owner records: create, list, look up a phone by pet name, change a phone number."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    def add_owner(self, name: str, phone: str, address: str) -> Owner:
        """
        Insert a new owner.

        Raises:
            ValidationError: a field is empty
            ConflictError: the phone number already belongs to an owner
        """
        rec = ChangeRecorder(self.db_path, "ADD_OWNER", ENTITY_OWNER)
        try:
            name = require_text(name, "name")
            phone = require_text(phone, "phone")
            address = require_text(address, "address")
            with get_conn(self.db_path) as conn:
                with transaction(conn):
                    if owner_repo.id_by_phone(conn, phone) is not None:
                        raise ConflictError(f"an owner with phone {phone} already exists")
                    try:
                        owner_id = owner_repo.insert_owner(conn, name, phone, address)
                    except sqlite3.IntegrityError as e:
                        raise ConflictError(f"an owner with phone {phone} already exists") from e
                owner = Owner.from_row(owner_repo.get_one(conn, owner_id))
        except RegistryError as e:
            record_change(rec, RESULT_ERROR, str(e))
            raise
        rec.bind(owner.id)
        rec.note(name=owner.name, phone=owner.phone, address=owner.address)
        record_change(rec, RESULT_OK)
        logger.info("owner %s added", owner.id)
        return owner

    def get_owners(self) -> list[Owner]:
        with get_conn(self.db_path) as conn:
            return [Owner.from_row(r) for r in owner_repo.list_all(conn)]

    def get_owner(self, owner_id: int) -> Owner:
        owner_id = require_int(owner_id, "owner_id")
        with get_conn(self.db_path) as conn:
            row = owner_repo.get_one(conn, owner_id)
        if row is None:
            raise OwnerReferenceError(f"no owner with id {owner_id}")
        return Owner.from_row(row)

    def count(self) -> int:
        with get_conn(self.db_path) as conn:
            return owner_repo.count_all(conn)

    def search_owner_phone_by_pet_name(self, pet_name: str | None) -> str | None:
        """Phone of the owner of the first pet (by insertion order) called ``pet_name``; None if there is none."""
        if not pet_name or not pet_name.strip():
            return None
        with get_conn(self.db_path) as conn:
            return owner_repo.phone_by_pet_name(conn, pet_name.strip())

    def update_phone(self, old_phone: str | None, new_phone: str | None) -> PhoneUpdate:
        """
        Change an owner's phone number from ``old_phone`` to ``new_phone``.

        Bad input is reported through the returned PhoneUpdate status instead of
        being raised. Storage failures still raise StorageError.
        """
        old_phone = (old_phone or "").strip()
        new_phone = (new_phone or "").strip()
        rec = ChangeRecorder(self.db_path, "UPDATE_PHONE", ENTITY_OWNER)
        if not old_phone or not new_phone:
            result = PhoneUpdate(PhoneUpdateStatus.MISSING_INPUT, old_phone, new_phone)
            record_change(rec, RESULT_REJECTED, result.message)
            return result

        try:
            with get_conn(self.db_path) as conn:
                with transaction(conn):
                    owner_id = owner_repo.id_by_phone(conn, old_phone)
                    if owner_id is None:
                        status = PhoneUpdateStatus.NOT_FOUND
                    elif new_phone != old_phone and owner_repo.id_by_phone(conn, new_phone) is not None:
                        rec.bind(owner_id)
                        status = PhoneUpdateStatus.PHONE_IN_USE
                    else:
                        rec.bind(owner_id)
                        affected = owner_repo.update_phone(conn, old_phone, new_phone)
                        status = PhoneUpdateStatus.UPDATED if affected > 0 else PhoneUpdateStatus.NOT_UPDATED
        except RegistryError as e:
            record_change(rec, RESULT_ERROR, str(e))
            raise

        result = PhoneUpdate(status, old_phone, new_phone)
        if result.ok:
            rec.note(phone=[old_phone, new_phone])
            record_change(rec, RESULT_OK)
        else:
            record_change(rec, RESULT_REJECTED, result.message)
        logger.info("phone update %s -> %s: %s", old_phone, new_phone, status.value)
        return result
