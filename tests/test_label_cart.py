"""
Tests for the label cart.
"""

import uuid

import pytest

from apps.labels.exceptions import InventoryItemsNotFound
from apps.labels.models import LabelCartItem
from apps.labels.services import LabelCart


@pytest.mark.django_db
class TestLabelCart:
    """Test LabelCart operations."""

    def test_add_is_idempotent(self, user, item_a):
        cart = LabelCart()

        assert cart.add(user, item_a.id) is True
        assert cart.add(user, item_a.id) is False
        assert LabelCartItem.objects.filter(user=user).count() == 1

    def test_add_unknown_item(self, user):
        with pytest.raises(InventoryItemsNotFound):
            LabelCart().add(user, uuid.uuid4())

    def test_add_many_counts_new_entries(self, user, item_a, item_b):
        cart = LabelCart()
        cart.add(user, item_a.id)

        added = cart.add_many(user, [item_a.id, item_b.id, str(item_b.id), uuid.uuid4(), "junk"])

        assert added == 1
        assert cart.items(user).count() == 2

    def test_carts_are_per_user(self, user, other_user, item_a):
        cart = LabelCart()
        cart.add(user, item_a.id)

        assert cart.items(other_user).count() == 0
        assert cart.add(other_user, item_a.id) is True

    def test_remove(self, user, other_user, item_a):
        cart = LabelCart()
        cart.add(user, item_a.id)
        entry = cart.items(user).get()

        assert cart.remove(other_user, entry.id) is False
        assert cart.remove(user, entry.id) is True
        assert cart.remove(user, entry.id) is False

    def test_remove_many_and_clear(self, user, item_a, item_b, make_item):
        cart = LabelCart()
        third = make_item()
        cart.add_many(user, [item_a.id, item_b.id, third.id])

        assert cart.remove_many(user, [item_a.id]) == 1
        assert cart.clear(user) == 2
        assert cart.items(user).count() == 0

    def test_accepts_user_or_pk(self, user, item_a):
        cart = LabelCart()
        cart.add(user.pk, item_a.id)

        assert cart.items(user).count() == 1
