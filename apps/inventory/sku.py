"""
SKU generation for gemstone inventory.

A SKU is built from the configured prefix, three master codes, the weight
rounded to two decimals and a suffix taken from one global counter:

    KG-LG-AME-PUR-5.25-0007

The suffix counter is shared by the whole SKU space, not per prefix, so two
items with identical codes and weight still get distinct SKUs. Suffix
allocation happens inside the caller's transaction; if that transaction
rolls back the suffix is simply skipped (gaps are fine, duplicates are not).
"""

import logging
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.db.models import F

from .models import InventoryItem, MasterCode, SkuSequence

logger = logging.getLogger(__name__)

CODE_PATTERN = re.compile(r"^[A-Z0-9]{1,10}$")

# Minimum width of the numeric suffix; larger counter values print in full
SUFFIX_WIDTH = 4


class SkuAllocationFailed(Exception):
    """Raised when the SKU counter cannot be incremented atomically."""

    pass


@dataclass(frozen=True)
class Found:
    """A master code that resolved to its SKU fragment."""

    code: str

    def or_fallback(self, fallback: str) -> str:
        return self.code


@dataclass(frozen=True)
class NotFound:
    """A master code reference that is absent, unknown or inactive."""

    kind: str
    code_id: Optional[str] = None

    def or_fallback(self, fallback: str) -> str:
        return fallback


CodeLookupResult = Union[Found, NotFound]


def lookup_code(kind: str, code_id) -> CodeLookupResult:
    """
    Resolve a master code id to its SKU fragment.

    Args:
        kind: MasterCode.CATEGORY, MasterCode.GEMSTONE or MasterCode.COLOR
        code_id: Primary key of the MasterCode row (may be None or blank)

    Returns:
        Found(code) when an active code of that kind exists, NotFound otherwise.
        Callers pick the fallback token with ``result.or_fallback(token)``.
    """
    if not code_id:
        return NotFound(kind)

    try:
        code = (
            MasterCode.objects.filter(kind=kind, id=code_id, is_active=True)
            .values_list("code", flat=True)
            .first()
        )
    except ValidationError:
        # Malformed UUID
        return NotFound(kind, str(code_id))

    if code is None:
        return NotFound(kind, str(code_id))
    return Found(code)


def normalize_code(token) -> str:
    """Upper-case a code token and check it is 1-10 alphanumeric characters."""
    normalized = str(token or "").strip().upper()
    if not CODE_PATTERN.match(normalized):
        raise ValueError(f"Invalid SKU code fragment: {token!r}")
    return normalized


def format_weight(weight_value) -> str:
    """Format a weight as a two-decimal string, rounding half up (5.255 -> '5.26')."""
    try:
        weight = Decimal(str(weight_value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValueError(f"Invalid weight: {weight_value!r}")

    if not weight.is_finite() or weight < 0:
        raise ValueError(f"Invalid weight: {weight_value!r}")

    return f"{weight.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):f}"


def allocate_sku_suffix(using=None) -> int:
    """
    Atomically increment the global SKU counter and return the new value.

    The counter row is locked with SELECT ... FOR UPDATE, so concurrent
    allocations are serialized by the database. Runs in a savepoint of the
    caller's transaction.

    Raises:
        SkuAllocationFailed: If the counter cannot be locked or written
    """
    try:
        with transaction.atomic(using=using):
            SkuSequence.objects.using(using).get_or_create(name=SkuSequence.DEFAULT)
            sequence = (
                SkuSequence.objects.using(using)
                .select_for_update()
                .get(name=SkuSequence.DEFAULT)
            )
            sequence.value = F("value") + 1
            sequence.save(update_fields=["value"])
            sequence.refresh_from_db(fields=["value"])
    except DatabaseError as e:
        logger.error("SKU suffix allocation failed: %s", e)
        raise SkuAllocationFailed("Could not allocate a SKU suffix") from e

    return sequence.value


def generate_sku(
    category_code: str,
    material_code: str,
    color_code: str,
    weight_value,
    weight_unit: str,
    using=None,
) -> str:
    """
    Generate a unique SKU for a new inventory item.

    Must be called inside the transaction that inserts the inventory row, so
    that a failed insert and the consumed suffix roll back together.

    Args:
        category_code: Category code fragment (e.g. 'LG')
        material_code: Gemstone/material code fragment (e.g. 'AME')
        color_code: Color code fragment (e.g. 'PUR')
        weight_value: Item weight
        weight_unit: 'cts' or 'gms' (validated, not part of the SKU)
        using: Database alias

    Returns:
        SKU string such as 'KG-LG-AME-PUR-5.25-0007'

    Raises:
        ValueError: If a code, the weight or the unit is invalid
        SkuAllocationFailed: If the suffix could not be allocated
    """
    if not transaction.get_connection(using).in_atomic_block:
        raise transaction.TransactionManagementError(
            "generate_sku() must run inside the inventory insert transaction"
        )

    valid_units = {unit for unit, _ in InventoryItem.WEIGHT_UNIT_CHOICES}
    if weight_unit not in valid_units:
        raise ValueError(f"Invalid weight unit: {weight_unit!r}")

    prefix = "-".join(
        [
            normalize_code(getattr(settings, "SKU_PREFIX", "KG")),
            normalize_code(category_code),
            normalize_code(material_code),
            normalize_code(color_code),
            format_weight(weight_value),
        ]
    )

    suffix = allocate_sku_suffix(using=using)
    sku = f"{prefix}-{suffix:0{SUFFIX_WIDTH}d}"

    logger.debug("Allocated SKU %s (%s %s)", sku, weight_value, weight_unit)
    return sku
