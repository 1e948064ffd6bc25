"""
Inventory creation service.

Creating an inventory item resolves its master codes, allocates a SKU and
inserts the row in one transaction. No row is ever persisted without a SKU.
"""

import logging

from django.db import transaction

from .models import InventoryItem, MasterCode
from .sku import Found, generate_sku, lookup_code

logger = logging.getLogger(__name__)

# Tokens used in the SKU when a master code is absent or unknown
DEFAULT_CODE_FALLBACKS = {
    MasterCode.CATEGORY: "XX",
    MasterCode.GEMSTONE: "XX",
    MasterCode.COLOR: "XX",
}


def create_inventory_item(
    *,
    item_name,
    weight_value,
    weight_unit=InventoryItem.CARATS,
    pricing_mode=InventoryItem.FLAT,
    category_code_id=None,
    gemstone_code_id=None,
    color_code_id=None,
    fallbacks=None,
    **fields,
):
    """
    Create an inventory item with a freshly generated SKU.

    Args:
        item_name: Display name of the item
        weight_value: Weight in ``weight_unit``
        weight_unit: 'cts' or 'gms'
        pricing_mode: InventoryItem.PER_CARAT or InventoryItem.FLAT
        category_code_id, gemstone_code_id, color_code_id: MasterCode ids (optional)
        fallbacks: Per-kind fallback tokens, defaults to DEFAULT_CODE_FALLBACKS
        **fields: Remaining InventoryItem fields (shape, prices, ...)

    Returns:
        The saved InventoryItem

    Raises:
        ValueError: On invalid codes, weight or unit
        SkuAllocationFailed: If the SKU counter is unavailable; nothing is saved
    """
    fallbacks = {**DEFAULT_CODE_FALLBACKS, **(fallbacks or {})}

    with transaction.atomic():
        codes = {}
        resolved = {}
        for kind, code_id in (
            (MasterCode.CATEGORY, category_code_id),
            (MasterCode.GEMSTONE, gemstone_code_id),
            (MasterCode.COLOR, color_code_id),
        ):
            result = lookup_code(kind, code_id)
            codes[kind] = result.or_fallback(fallbacks[kind])
            resolved[kind] = code_id if isinstance(result, Found) else None

        sku = generate_sku(
            codes[MasterCode.CATEGORY],
            codes[MasterCode.GEMSTONE],
            codes[MasterCode.COLOR],
            weight_value,
            weight_unit,
        )

        item = InventoryItem.objects.create(
            sku=sku,
            item_name=item_name,
            weight_value=weight_value,
            weight_unit=weight_unit,
            pricing_mode=pricing_mode,
            category_code_id=resolved[MasterCode.CATEGORY],
            gemstone_code_id=resolved[MasterCode.GEMSTONE],
            color_code_id=resolved[MasterCode.COLOR],
            **fields,
        )

    logger.info("Created inventory item %s (%s)", item.sku, item.id)
    return item
