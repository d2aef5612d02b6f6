"""Error types raised by the registry services.

Routes and the CLI translate these into user-visible responses.
"""
from __future__ import annotations


class RegistryError(Exception):
    """Base class for all registry errors."""


class ValidationError(RegistryError, ValueError):
    """A required field is missing or malformed."""


class ConflictError(RegistryError):
    """The phone number already belongs to an owner."""


class OwnerReferenceError(RegistryError, LookupError):
    """No owner exists with the given id."""


class StorageError(RegistryError):
    """The backing store could not be opened or a statement failed."""
