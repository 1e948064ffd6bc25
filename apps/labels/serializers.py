"""
Serializers for the label printing API.
"""

from rest_framework import serializers

from apps.inventory.serializers import InventoryItemSerializer

from .exceptions import InvalidLabelFormat
from .formats import LabelFormat
from .models import LabelCartItem
from .services import MissingItemPolicy


class LabelCartItemSerializer(serializers.ModelSerializer):
    """Cart entry with the queued inventory item embedded."""

    inventory = InventoryItemSerializer(read_only=True)

    class Meta:
        model = LabelCartItem
        fields = ["id", "inventory", "added_at"]
        read_only_fields = fields


class CartAddSerializer(serializers.Serializer):
    """Add one item (``inventory_id``) or several (``inventory_ids``) to the cart."""

    inventory_id = serializers.UUIDField(required=False)
    inventory_ids = serializers.ListField(child=serializers.UUIDField(), required=False)

    def validate(self, data):
        if not data.get("inventory_id") and not data.get("inventory_ids"):
            raise serializers.ValidationError("Provide inventory_id or inventory_ids.")
        return data


class LabelFormatField(serializers.Field):
    """Parses a print format object into a LabelFormat, filling in defaults."""

    def to_internal_value(self, data):
        try:
            return LabelFormat.from_dict(data)
        except InvalidLabelFormat as e:
            raise serializers.ValidationError(str(e))

    def to_representation(self, value):
        return value.as_dict() if isinstance(value, LabelFormat) else value


class PrintJobCreateSerializer(serializers.Serializer):
    """
    Input for creating a print job.

    Inventory ids are kept as given (not UUID-validated here) so that unknown
    or malformed ids are handled by the missing item policy.
    """

    inventory_ids = serializers.ListField(
        child=serializers.CharField(max_length=64),
        allow_empty=False,
    )
    print_format = LabelFormatField(allow_null=True, default=None)
    missing_item_policy = serializers.ChoiceField(
        choices=[policy.value for policy in MissingItemPolicy],
        required=False,
    )


class VerifyPriceSerializer(serializers.Serializer):
    """A price code as read off a printed tag."""

    encoded_string = serializers.CharField(max_length=32, trim_whitespace=True)
    version = serializers.IntegerField(required=False, min_value=1)
