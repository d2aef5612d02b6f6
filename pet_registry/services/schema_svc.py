from __future__ import annotations

import logging

from ..db import get_conn
from ..audit import ensure_audit_schema
from ..repository import owner_repo, pet_repo

logger = logging.getLogger(__name__)


def ensure_registry_schema(db_path: str):
    """Create the owner, pet and registry_change tables if they are missing. Safe to call repeatedly."""
    with get_conn(db_path) as conn:
        owner_repo.ensure_schema(conn)
        pet_repo.ensure_schema(conn)
        ensure_audit_schema(conn)
    logger.debug("registry schema ready at %s", db_path)
