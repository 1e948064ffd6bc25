"""
Views for inventory management.

Only what the label subsystem needs from inventory is exposed here:
listing and reading items, and creating items with a generated SKU.
"""

import logging

from django.db.models import Q

from rest_framework import filters, generics, permissions, status
from rest_framework.response import Response

from .models import InventoryItem, MasterCode
from .serializers import (
    InventoryItemCreateSerializer,
    InventoryItemSerializer,
    MasterCodeSerializer,
)
from .services import create_inventory_item
from .sku import SkuAllocationFailed

logger = logging.getLogger(__name__)


class InventoryItemListCreateView(generics.ListCreateAPIView):
    """
    API endpoint for listing inventory items and creating new ones.

    GET supports ``search`` (SKU, name, gem type, stock location) and
    ``pricing_mode`` filters. POST generates the SKU server-side.
    """

    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [filters.OrderingFilter]
    ordering_fields = ["sku", "item_name", "weight_value", "created_at"]
    ordering = ["-created_at"]

    def get_serializer_class(self):
        if self.request.method == "POST":
            return InventoryItemCreateSerializer
        return InventoryItemSerializer

    def get_queryset(self):
        queryset = InventoryItem.objects.select_related(
            "category_code", "gemstone_code", "color_code"
        )

        search = self.request.query_params.get("search", None)
        if search:
            queryset = queryset.filter(
                Q(sku__icontains=search)
                | Q(item_name__icontains=search)
                | Q(gem_type__icontains=search)
                | Q(stock_location__icontains=search)
            )

        pricing_mode = self.request.query_params.get("pricing_mode", None)
        if pricing_mode:
            queryset = queryset.filter(pricing_mode=pricing_mode)

        return queryset

    def create(self, request, *args, **kwargs):
        serializer = InventoryItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            item = create_inventory_item(**serializer.validated_data)
        except SkuAllocationFailed:
            return Response(
                {"detail": "Could not allocate a SKU. Please retry."},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        except ValueError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(InventoryItemSerializer(item).data, status=status.HTTP_201_CREATED)


class InventoryItemDetailView(generics.RetrieveAPIView):
    """API endpoint for retrieving a single inventory item."""

    serializer_class = InventoryItemSerializer
    permission_classes = [permissions.IsAuthenticated]
    lookup_field = "id"
    queryset = InventoryItem.objects.select_related("category_code", "gemstone_code", "color_code")


class MasterCodeListView(generics.ListAPIView):
    """API endpoint for listing active master codes, optionally filtered by ``kind``."""

    serializer_class = MasterCodeSerializer
    permission_classes = [permissions.IsAuthenticated]
    pagination_class = None

    def get_queryset(self):
        queryset = MasterCode.objects.filter(is_active=True)
        kind = self.request.query_params.get("kind", None)
        if kind:
            queryset = queryset.filter(kind=kind.upper())
        return queryset
