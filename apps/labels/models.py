"""
Label printing models.

- LabelCartItem: items a user has queued for printing
- PrintJob: one batch print action, append-only
- PrintJobLine: the frozen price data of one printed label

A job line stores both the raw price and its full encoding (string, check
digit, method, version). Reprints read prices only from these rows, never
from the live inventory record.
"""

import uuid

from django.conf import settings
from django.db import models

from apps.inventory.models import InventoryItem


class LabelCartItem(models.Model):
    """An inventory item waiting in a user's label cart."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="label_cart_items",
    )

    inventory = models.ForeignKey(
        InventoryItem,
        on_delete=models.CASCADE,
        related_name="label_cart_items",
    )

    added_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "label_cart_items"
        ordering = ["-added_at"]
        verbose_name = "Label Cart Item"
        verbose_name_plural = "Label Cart Items"
        unique_together = [["user", "inventory"]]

    def __str__(self):
        return f"{self.user_id} - {self.inventory_id}"


class PrintJob(models.Model):
    """
    One batch label-printing action.

    The owner reference has no database constraint and is not cascaded:
    deleting a user leaves their jobs in place with a dangling ``owner_id``.
    Such orphans are cleaned up by ``OrphanReconciler``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="print_jobs",
        help_text="User who created the job",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    print_format = models.JSONField(
        default=dict,
        help_text="Snapshot of the print format configuration used for this job",
    )

    total_items = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "label_print_jobs"
        ordering = ["-created_at"]
        verbose_name = "Print Job"
        verbose_name_plural = "Print Jobs"
        indexes = [
            models.Index(fields=["-created_at"], name="print_job_created_idx"),
            models.Index(fields=["owner"], name="print_job_owner_idx"),
        ]

    def __str__(self):
        return f"Print job {self.id} ({self.total_items} labels)"


class PrintJobLine(models.Model):
    """
    The price data of one label as printed.

    ``sku`` is a lookup key only: the inventory row may change or disappear
    without affecting this record.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    job = models.ForeignKey(
        PrintJob,
        on_delete=models.CASCADE,
        related_name="lines",
    )

    position = models.PositiveIntegerField(default=0)

    sku = models.CharField(max_length=100)

    # Wide enough for any rate x weight the inventory columns can hold
    price_amount = models.DecimalField(max_digits=22, decimal_places=2)

    encoded_string = models.CharField(max_length=32)

    checksum_digit = models.PositiveSmallIntegerField()

    checksum_method = models.CharField(max_length=16, default="MOD9")

    encoding_version = models.PositiveSmallIntegerField(default=1)

    class Meta:
        db_table = "label_print_job_lines"
        ordering = ["job", "position"]
        verbose_name = "Print Job Line"
        verbose_name_plural = "Print Job Lines"
        indexes = [
            models.Index(fields=["sku"], name="print_job_line_sku_idx"),
        ]

    def __str__(self):
        return f"{self.sku} @ {self.encoded_string}"
