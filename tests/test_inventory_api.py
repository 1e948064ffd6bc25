"""
Tests for the inventory API endpoints.
"""

from unittest import mock

from django.urls import reverse

import pytest
from rest_framework import status

from apps.inventory.models import InventoryItem, MasterCode
from apps.inventory.sku import SkuAllocationFailed


@pytest.mark.django_db
class TestInventoryItemAPI:
    """Test inventory item listing and creation."""

    def test_create_generates_sku(self, authenticated_client, master_codes):
        client, user = authenticated_client

        response = client.post(
            reverse("inventory:item_list"),
            {
                "item_name": "Amethyst Oval",
                "gem_type": "Amethyst",
                "category_code_id": str(master_codes["category"].id),
                "gemstone_code_id": str(master_codes["gemstone"].id),
                "color_code_id": str(master_codes["color"].id),
                "weight_value": "5.25",
                "weight_unit": "cts",
                "pricing_mode": "PER_CARAT",
                "selling_rate_per_carat": "400.00",
            },
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["sku"] == "KG-LG-AME-PUR-5.25-0001"
        assert response.data["color"] == "Purple"
        assert response.data["label_price"] == "2100.00"
        assert response.data["weight_ratti"] == "5.72"

    def test_client_sku_ignored(self, authenticated_client):
        client, user = authenticated_client

        response = client.post(
            reverse("inventory:item_list"),
            {
                "sku": "MINE-001",
                "item_name": "Loose stone",
                "weight_value": "1.00",
                "weight_unit": "cts",
                "pricing_mode": "FLAT",
                "flat_selling_price": "500.00",
            },
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["sku"] == "KG-XX-XX-XX-1.00-0001"

    def test_per_carat_requires_rate(self, authenticated_client):
        client, user = authenticated_client

        response = client.post(
            reverse("inventory:item_list"),
            {
                "item_name": "No rate",
                "weight_value": "1.00",
                "weight_unit": "cts",
                "pricing_mode": "PER_CARAT",
            },
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "selling_rate_per_carat" in response.data

    def test_sku_allocation_failure(self, authenticated_client):
        client, user = authenticated_client

        with mock.patch(
            "apps.inventory.views.create_inventory_item",
            side_effect=SkuAllocationFailed("counter unavailable"),
        ):
            response = client.post(
                reverse("inventory:item_list"),
                {
                    "item_name": "Loose stone",
                    "weight_value": "1.00",
                    "weight_unit": "cts",
                    "pricing_mode": "FLAT",
                    "flat_selling_price": "500.00",
                },
                format="json",
            )

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert not InventoryItem.objects.exists()

    def test_list_and_search(self, authenticated_client, item_a, item_b):
        client, user = authenticated_client

        response = client.get(reverse("inventory:item_list"))
        assert response.status_code == status.HTTP_200_OK
        assert response.data["count"] == 2

        response = client.get(reverse("inventory:item_list"), {"search": "Item A"})
        assert [row["sku"] for row in response.data["results"]] == [item_a.sku]

        response = client.get(reverse("inventory:item_list"), {"pricing_mode": "FLAT"})
        assert [row["sku"] for row in response.data["results"]] == [item_b.sku]

    def test_detail(self, authenticated_client, item_a):
        client, user = authenticated_client

        response = client.get(reverse("inventory:item_detail", args=[item_a.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["label_price"] == "1250.00"

    def test_codes_by_kind(self, authenticated_client, master_codes):
        client, user = authenticated_client

        response = client.get(reverse("inventory:code_list"), {"kind": "gemstone"})

        assert response.status_code == status.HTTP_200_OK
        assert [row["code"] for row in response.data] == ["AME"]
        assert response.data[0]["kind"] == MasterCode.GEMSTONE
