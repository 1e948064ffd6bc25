"""
Tests for reprinting past print jobs.
"""

import uuid
from decimal import Decimal

import pytest

from apps.inventory.models import InventoryItem
from apps.labels.exceptions import JobNotFound
from apps.labels.services import JobHistory, PrintJobManager, ReprintResolver


@pytest.mark.django_db
class TestReprint:
    """Test ReprintResolver."""

    def test_price_frozen_at_print_time(self, user, make_item):
        """Changing the item's price after printing does not change the reprint."""
        item = make_item(flat_selling_price=Decimal("1000.00"))
        created = PrintJobManager().create_job([item.id], {}, user.pk)

        item.flat_selling_price = Decimal("2000.00")
        item.save()

        lines = ReprintResolver().reprint(created.job_id)

        assert len(lines) == 1
        assert lines[0].price_amount == Decimal("1000.00")
        assert lines[0].encoded_string == "10001"
        assert lines[0].encoded_string == created.lines[0].encoded_string
        assert lines[0].checksum_digit == 1

    def test_display_fields_are_live(self, user, make_item):
        item = make_item(item_name="Old name", stock_location="Tray A")
        created = PrintJobManager().create_job([item.id], {}, user.pk)

        InventoryItem.objects.filter(pk=item.pk).update(
            item_name="New name", stock_location="Safe 2"
        )

        line = ReprintResolver().reprint(created.job_id)[0]
        assert line.item_name == "New name"
        assert line.stock_location == "Safe 2"
        assert line.pricing_mode == "REPRINT"
        assert line.selling_rate_per_carat is None

    def test_order_preserved(self, user, item_a, item_b):
        created = PrintJobManager().create_job([item_b.id, item_a.id], {}, user.pk)

        skus = [line.sku for line in ReprintResolver().reprint(created.job_id)]

        assert skus == [item_b.sku, item_a.sku]

    def test_deleted_inventory_line_dropped(self, user, item_a, item_b):
        """Lines whose item no longer exists are left out; the rest still reprint."""
        created = PrintJobManager().create_job([item_a.id, item_b.id], {}, user.pk)
        item_a.delete()

        lines = ReprintResolver().reprint(created.job_id)

        assert [line.sku for line in lines] == [item_b.sku]
        assert lines[0].price_amount == Decimal("800.00")

    def test_unknown_job(self):
        with pytest.raises(JobNotFound):
            ReprintResolver().reprint(uuid.uuid4())

    def test_malformed_job_id(self):
        with pytest.raises(JobNotFound):
            ReprintResolver().reprint("not-a-job")

    def test_reprint_is_repeatable(self, user, item_a):
        created = PrintJobManager().create_job([item_a.id], {}, user.pk)
        resolver = ReprintResolver()

        assert resolver.reprint(created.job_id) == resolver.reprint(created.job_id)

    def test_job_detail_includes_format(self, user, item_a):
        created = PrintJobManager().create_job(
            [item_a.id], {"page_size": "A4", "show_price": True}, user.pk
        )

        detail = JobHistory().job_detail(created.job_id)

        assert detail.job_id == created.job_id
        assert detail.print_format["page_size"] == "A4"
        assert detail.print_format["cols"] == 4
        assert detail.print_format["show_price"] is True
        assert [line.sku for line in detail.lines] == [item_a.sku]

    def test_as_dict_is_json_friendly(self, user, item_a):
        created = PrintJobManager().create_job([item_a.id], {}, user.pk)

        data = ReprintResolver().reprint(created.job_id)[0].as_dict()

        assert data["inventory_id"] == str(item_a.id)
        assert data["price_amount"] == "1250.00"
        assert data["weight_value"] == "2.50"
        assert data["encoded_string"] == "12508"
