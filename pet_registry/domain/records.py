from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from sqlite3 import Row
from typing import Any


@dataclass(frozen=True)
class Owner:
    id: int
    name: str
    phone: str
    address: str

    @classmethod
    def from_row(cls, row: Row) -> "Owner":
        # columns are looked up by name; the table declares them as id, phone, address, name
        return cls(
            id=int(row["id"]),
            name=row["name"],
            phone=row["phone"],
            address=row["address"],
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Pet:
    id: int
    owner_id: int
    name: str
    species: str

    @classmethod
    def from_row(cls, row: Row) -> "Pet":
        return cls(
            id=int(row["id"]),
            owner_id=int(row["owner_id"]),
            name=row["name"],
            species=row["species"],
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class PhoneUpdateStatus(str, Enum):
    UPDATED = "UPDATED"
    MISSING_INPUT = "MISSING_INPUT"
    NOT_FOUND = "NOT_FOUND"
    PHONE_IN_USE = "PHONE_IN_USE"
    NOT_UPDATED = "NOT_UPDATED"


@dataclass(frozen=True)
class PhoneUpdate:
    """Outcome of a phone number change. Bad input is reported here, not raised."""

    status: PhoneUpdateStatus
    old_phone: str
    new_phone: str

    @property
    def ok(self) -> bool:
        return self.status is PhoneUpdateStatus.UPDATED

    @property
    def message(self) -> str:
        if self.status is PhoneUpdateStatus.UPDATED:
            return f"Phone number {self.old_phone} changed to {self.new_phone}."
        if self.status is PhoneUpdateStatus.MISSING_INPUT:
            return "Both the old and the new phone number are required."
        if self.status is PhoneUpdateStatus.NOT_FOUND:
            return f"Phone number {self.old_phone} was not found."
        if self.status is PhoneUpdateStatus.PHONE_IN_USE:
            return f"Phone number {self.new_phone} already belongs to another owner."
        return "Update failed, no rows were changed."
