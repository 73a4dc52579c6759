"""
Core — Payload Normalisation

Helpers shared by the inventory services to coerce caller input into
UUIDs, fixed-scale Decimals and trimmed text, raising InvalidInputError on
anything malformed.

@file core/validators.py
"""

import uuid
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from core.constants import QUANTITY_MAX, QUANTITY_STEP
from core.exceptions import InvalidInputError


def parse_uuid(value, field: str = 'id') -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        raise InvalidInputError(detail=f'{field} must be a valid UUID.')


def to_quantity(value, field: str = 'quantity') -> Decimal:
    """Coerce to a Decimal rounded to two places, within +/- QUANTITY_MAX."""
    if isinstance(value, bool):
        raise InvalidInputError(detail=f'{field} must be a number.')
    try:
        qty = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidInputError(detail=f'{field} must be a number.')
    if not qty.is_finite():
        raise InvalidInputError(detail=f'{field} must be a finite number.')
    return ensure_quantity_in_range(qty.quantize(QUANTITY_STEP, rounding=ROUND_HALF_UP), field)


def ensure_quantity_in_range(qty: Decimal, field: str = 'quantity') -> Decimal:
    """Reject magnitudes that do not fit a quantity column, e.g. after merging lines."""
    if abs(qty) > QUANTITY_MAX:
        raise InvalidInputError(detail=f'{field} is too large.')
    return qty


def to_nullable_text(value, field: str = 'note', max_length: int | None = None) -> str | None:
    """Trim text; empty becomes None."""
    if value is None:
        return None
    text = str(value).strip()
    if max_length is not None and len(text) > max_length:
        raise InvalidInputError(detail=f'{field} must be at most {max_length} characters.')
    return text or None
