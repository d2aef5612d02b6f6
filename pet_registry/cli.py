#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Pet registry command line (SQLite)

Commands:
  init                Create the owner/pet tables if missing
  add-owner           Add an owner (name, phone, address)
  add-pet             Add a pet for an existing owner
  owners              List all owners
  pets                List all pets, or the pets of one owner (--owner-id)
  find-phone          Print the phone of the owner of a pet, by pet name
  update-phone        Change an owner's phone number (prompts unless --old/--new given)

Notes:
- The database path comes from --db, else PET_DB_PATH, else config.yaml, else ./Data.db.
- Every command makes sure the schema exists first.
"""

import argparse
import logging
import sys

from .db import get_db_path
from .domain.records import PhoneUpdateStatus
from .errors import RegistryError
from .services.owner_svc import OwnerService
from .services.pet_svc import PetService
from .services.schema_svc import ensure_registry_schema

logger = logging.getLogger(__name__)


# ---------------- Output helpers ----------------

def print_owners(owners, out=None):
    out = out or sys.stdout
    print("******* Owners ********", file=out)
    for o in owners:
        print(f"Name: {o.name} - Phone: {o.phone} - ID: {o.id}", file=out)
    print("***********************\n", file=out)


def print_pets(pets, out=None):
    out = out or sys.stdout
    for p in pets:
        print(f"- {p.name}, species: {p.species} (ID: {p.id}, owner ID: {p.owner_id})", file=out)


# ---------------- Commands ----------------

def cmd_init(args):
    print(f"Schema ready in {args.db}.")
    return 0


def cmd_add_owner(args):
    owner = OwnerService(args.db).add_owner(args.name, args.phone, args.address)
    print(f"Owner {owner.name} added with ID {owner.id}.")
    return 0


def cmd_add_pet(args):
    pet = PetService(args.db).add_pet(args.name, args.owner_id, args.species)
    print(f"Pet {pet.name} added with ID {pet.id}.")
    return 0


def cmd_owners(args):
    print_owners(OwnerService(args.db).get_owners())
    return 0


def cmd_pets(args):
    svc = PetService(args.db)
    if args.owner_id is None:
        print_pets(svc.get_pets())
        return 0
    pets = svc.get_pets_by_owner(args.owner_id)
    if not pets:
        print(f"No pets found for owner ID {args.owner_id}.")
        return 0
    print(f"Pets of owner ID {args.owner_id}:")
    print_pets(pets)
    return 0


def cmd_find_phone(args):
    phone = OwnerService(args.db).search_owner_phone_by_pet_name(args.pet_name)
    if phone is None:
        print(f"Pet {args.pet_name} was not found.")
        return 1
    print(phone)
    return 0


def _prompt(input_fn, text: str) -> str:
    # a closed stdin counts as an empty answer
    try:
        return input_fn(text)
    except EOFError:
        print()
        return ""


def cmd_update_phone(args, input_fn=None):
    input_fn = input_fn or input
    svc = OwnerService(args.db)
    old_phone, new_phone = args.old, args.new
    if old_phone is None or new_phone is None:
        print_owners(svc.get_owners())
        if old_phone is None:
            old_phone = _prompt(input_fn, "Phone number to change: ")
        if new_phone is None:
            new_phone = _prompt(input_fn, "New phone number: ")
    res = svc.update_phone(old_phone, new_phone)
    print(res.message)
    return 0 if res.status is PhoneUpdateStatus.UPDATED else 1


# ---------------- Main ----------------

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="pet-registry", description="Owner and pet registry")
    ap.add_argument("--db", default=None, help="SQLite database path")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p = sub.add_parser("init")
    p.set_defaults(func=cmd_init)

    p = sub.add_parser("add-owner")
    p.add_argument("--name", required=True)
    p.add_argument("--phone", required=True)
    p.add_argument("--address", required=True)
    p.set_defaults(func=cmd_add_owner)

    p = sub.add_parser("add-pet")
    p.add_argument("--name", required=True)
    p.add_argument("--owner-id", type=int, required=True)
    p.add_argument("--species", required=True)
    p.set_defaults(func=cmd_add_pet)

    p = sub.add_parser("owners")
    p.set_defaults(func=cmd_owners)

    p = sub.add_parser("pets")
    p.add_argument("--owner-id", type=int, default=None)
    p.set_defaults(func=cmd_pets)

    p = sub.add_parser("find-phone")
    p.add_argument("pet_name")
    p.set_defaults(func=cmd_find_phone)

    p = sub.add_parser("update-phone")
    p.add_argument("--old", default=None)
    p.add_argument("--new", default=None)
    p.set_defaults(func=cmd_update_phone)
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args.db = args.db or get_db_path()
    try:
        ensure_registry_schema(args.db)
        return args.func(args)
    except RegistryError as e:
        logger.debug("command %s failed", args.cmd, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
