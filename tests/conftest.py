"""
Pytest configuration and fixtures for the gemstone back-office.
"""

import itertools
from decimal import Decimal

import pytest

from apps.inventory.models import InventoryItem, MasterCode


@pytest.fixture
def api_client():
    """
    Fixture for Django REST framework API client.
    """
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(
        username="labeler",
        email="labeler@example.com",
        password="testpass123",
        first_name="Asha",
        last_name="Rao",
    )


@pytest.fixture
def other_user(django_user_model):
    return django_user_model.objects.create_user(
        username="other", email="other@example.com", password="testpass123"
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """
    Fixture for authenticated API client.
    """
    api_client.force_authenticate(user=user)
    return api_client, user


@pytest.fixture
def master_codes():
    """Category LG, gemstone AME and color PUR."""
    return {
        "category": MasterCode.objects.create(
            kind=MasterCode.CATEGORY, name="Loose Gemstone", code="LG"
        ),
        "gemstone": MasterCode.objects.create(
            kind=MasterCode.GEMSTONE, name="Amethyst", code="AME"
        ),
        "color": MasterCode.objects.create(kind=MasterCode.COLOR, name="Purple", code="PUR"),
    }


@pytest.fixture
def make_item(master_codes):
    """
    Factory for inventory items with a fixed, test-local SKU.

    Defaults to a flat-priced 1.00 ct amethyst at 1000.
    """
    counter = itertools.count(1)

    def _make_item(**fields):
        n = next(counter)
        defaults = {
            "sku": f"KG-LG-AME-PUR-1.00-{n:04d}",
            "item_name": f"Amethyst {n}",
            "gem_type": "Amethyst",
            "shape": "Oval",
            "dimensions_mm": "8x6",
            "stock_location": "Tray A",
            "color_code": master_codes["color"],
            "weight_value": Decimal("1.00"),
            "weight_unit": InventoryItem.CARATS,
            "pricing_mode": InventoryItem.FLAT,
            "flat_selling_price": Decimal("1000.00"),
        }
        defaults.update(fields)
        return InventoryItem.objects.create(**defaults)

    return _make_item


@pytest.fixture
def item_a(make_item):
    """Per-carat item: rate 500 x 2.50 ct = 1250."""
    return make_item(
        sku="KG-LG-AME-PUR-2.50-0001",
        item_name="Item A",
        weight_value=Decimal("2.50"),
        pricing_mode=InventoryItem.PER_CARAT,
        selling_rate_per_carat=Decimal("500.00"),
        flat_selling_price=None,
    )


@pytest.fixture
def item_b(make_item):
    """Flat item priced at 800."""
    return make_item(
        sku="KG-LG-AME-PUR-1.20-0002",
        item_name="Item B",
        weight_value=Decimal("1.20"),
        pricing_mode=InventoryItem.FLAT,
        flat_selling_price=Decimal("800.00"),
    )
