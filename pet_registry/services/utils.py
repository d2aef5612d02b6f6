from __future__ import annotations

# pet_registry/services/utils.py
import logging

from ..errors import StorageError, ValidationError
from ..audit import ChangeRecorder

logger = logging.getLogger(__name__)


def require_text(value, field: str) -> str:
    """Return ``value`` stripped; empty or missing values raise ValidationError."""
    if value is None:
        raise ValidationError(f"{field} is required")
    text = str(value).strip()
    if not text:
        raise ValidationError(f"{field} is required")
    return text


def require_int(value, field: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer") from None


def record_change(rec: ChangeRecorder, result: str, detail: str | None = None):
    # a failed history write must not hide the outcome of the operation itself
    try:
        rec.commit(result, detail)
    except StorageError as e:
        logger.warning("change history write failed for %s: %s", rec.action, e)
