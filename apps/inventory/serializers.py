"""
Serializers for inventory models.
"""

from decimal import Decimal

from rest_framework import serializers

from .models import InventoryItem, MasterCode


class MasterCodeSerializer(serializers.ModelSerializer):
    """Serializer for MasterCode model."""

    class Meta:
        model = MasterCode
        fields = ["id", "kind", "name", "code", "is_active"]
        read_only_fields = ["id"]


class InventoryItemSerializer(serializers.ModelSerializer):
    """Read serializer for inventory items, including the label price."""

    category_code = serializers.CharField(source="category_code.code", read_only=True, default="")
    gemstone_code = serializers.CharField(source="gemstone_code.code", read_only=True, default="")
    color = serializers.CharField(source="color_name", read_only=True)
    label_price = serializers.DecimalField(max_digits=22, decimal_places=2, read_only=True)

    class Meta:
        model = InventoryItem
        fields = [
            "id",
            "sku",
            "item_name",
            "gem_type",
            "shape",
            "dimensions_mm",
            "stock_location",
            "category_code",
            "gemstone_code",
            "color",
            "weight_value",
            "weight_unit",
            "weight_ratti",
            "pricing_mode",
            "selling_rate_per_carat",
            "flat_selling_price",
            "label_price",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class InventoryItemCreateSerializer(serializers.Serializer):
    """
    Input for creating an inventory item.

    The SKU is never accepted from the client; it is generated on save.
    """

    item_name = serializers.CharField(max_length=255)
    gem_type = serializers.CharField(max_length=100, required=False, allow_blank=True)
    shape = serializers.CharField(max_length=50, required=False, allow_blank=True)
    dimensions_mm = serializers.CharField(max_length=50, required=False, allow_blank=True)
    stock_location = serializers.CharField(max_length=100, required=False, allow_blank=True)
    category_code_id = serializers.UUIDField(required=False, allow_null=True)
    gemstone_code_id = serializers.UUIDField(required=False, allow_null=True)
    color_code_id = serializers.UUIDField(required=False, allow_null=True)
    weight_value = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0.00")
    )
    weight_unit = serializers.ChoiceField(choices=InventoryItem.WEIGHT_UNIT_CHOICES)
    pricing_mode = serializers.ChoiceField(choices=InventoryItem.PRICING_MODE_CHOICES)
    selling_rate_per_carat = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0.00"), required=False, allow_null=True
    )
    flat_selling_price = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0.00"), required=False, allow_null=True
    )

    def validate(self, data):
        """Per-carat items need a rate; flat items need a price or a rate."""
        if data["pricing_mode"] == InventoryItem.PER_CARAT:
            if not data.get("selling_rate_per_carat"):
                raise serializers.ValidationError(
                    {"selling_rate_per_carat": "Required for per-carat pricing."}
                )
        elif not data.get("flat_selling_price") and not data.get("selling_rate_per_carat"):
            raise serializers.ValidationError(
                {"flat_selling_price": "Flat pricing needs a flat price or a rate per carat."}
            )
        return data
