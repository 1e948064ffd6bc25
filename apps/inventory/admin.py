"""
Admin configuration for inventory models.
"""

from django.contrib import admin

from .models import InventoryItem, MasterCode, SkuSequence


@admin.register(MasterCode)
class MasterCodeAdmin(admin.ModelAdmin):
    """Admin interface for MasterCode."""

    list_display = ["code", "name", "kind", "is_active"]
    list_filter = ["kind", "is_active"]
    search_fields = ["code", "name"]


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    """Admin interface for InventoryItem."""

    list_display = [
        "sku",
        "item_name",
        "gem_type",
        "weight_value",
        "weight_unit",
        "pricing_mode",
        "status",
    ]
    list_filter = ["pricing_mode", "weight_unit", "status", "created_at"]
    search_fields = ["sku", "item_name", "gem_type", "stock_location"]
    readonly_fields = ["sku", "weight_ratti", "created_at", "updated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("sku", "item_name", "gem_type", "shape", "dimensions_mm", "status"),
            },
        ),
        (
            "Codes",
            {
                "fields": ("category_code", "gemstone_code", "color_code"),
            },
        ),
        (
            "Weight",
            {
                "fields": ("weight_value", "weight_unit", "weight_ratti"),
            },
        ),
        (
            "Pricing",
            {
                "fields": ("pricing_mode", "selling_rate_per_carat", "flat_selling_price"),
            },
        ),
        (
            "Location",
            {
                "fields": ("stock_location",),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def has_add_permission(self, request):
        # Items are created through the API so that a SKU is always generated
        return False


@admin.register(SkuSequence)
class SkuSequenceAdmin(admin.ModelAdmin):
    """Read-only view of the SKU counter."""

    list_display = ["name", "value"]
    readonly_fields = ["name", "value"]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
