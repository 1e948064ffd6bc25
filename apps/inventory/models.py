"""
Inventory models for the gemstone back-office.

The label printing subsystem reads these rows; it never mutates them.
- Master code tables (category, gemstone, color) used to build SKUs
- Gemstone inventory items with per-carat or flat pricing
- The global SKU sequence counter
"""

import uuid
from decimal import ROUND_HALF_UP, Decimal

from django.core.validators import MinValueValidator
from django.db import models


class MasterCode(models.Model):
    """
    Short uppercase code for a category, gemstone or color.

    The ``code`` is the fragment that ends up in generated SKUs,
    e.g. ``LG`` (category), ``AME`` (gemstone), ``PUR`` (color).
    """

    CATEGORY = "CATEGORY"
    GEMSTONE = "GEMSTONE"
    COLOR = "COLOR"

    KIND_CHOICES = [
        (CATEGORY, "Category"),
        (GEMSTONE, "Gemstone"),
        (COLOR, "Color"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    kind = models.CharField(max_length=20, choices=KIND_CHOICES)

    name = models.CharField(
        max_length=100,
        help_text="Display name (e.g., 'Loose Gemstone', 'Amethyst', 'Purple')",
    )

    code = models.CharField(
        max_length=10,
        help_text="Uppercase alphanumeric code used in SKUs",
    )

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "inventory_master_codes"
        ordering = ["kind", "code"]
        verbose_name = "Master Code"
        verbose_name_plural = "Master Codes"
        unique_together = [["kind", "code"]]

    def __str__(self):
        return f"{self.code} - {self.name}"


class InventoryItem(models.Model):
    """
    A single gemstone in stock.

    Pricing is either per carat (rate x weight) or a flat price for the
    whole stone. ``sku`` is assigned once at creation by
    ``apps.inventory.sku.generate_sku`` and never changes.
    """

    PER_CARAT = "PER_CARAT"
    FLAT = "FLAT"

    PRICING_MODE_CHOICES = [
        (PER_CARAT, "Per Carat"),
        (FLAT, "Flat"),
    ]

    CARATS = "cts"
    GRAMS = "gms"

    WEIGHT_UNIT_CHOICES = [
        (CARATS, "Carats"),
        (GRAMS, "Grams"),
    ]

    # Ratti conversion factors per weight unit
    RATTI_FACTORS = {
        CARATS: Decimal("1.09"),
        GRAMS: Decimal("5.45"),
    }

    IN_STOCK = "IN_STOCK"
    RESERVED = "RESERVED"
    SOLD = "SOLD"

    STATUS_CHOICES = [
        (IN_STOCK, "In Stock"),
        (RESERVED, "Reserved"),
        (SOLD, "Sold"),
    ]

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the inventory item",
    )

    sku = models.CharField(
        max_length=100,
        unique=True,
        help_text="Stock Keeping Unit, assigned once at creation",
    )

    item_name = models.CharField(
        max_length=255,
        help_text="Item name (e.g., 'Natural Amethyst Oval')",
    )

    gem_type = models.CharField(max_length=100, blank=True)

    shape = models.CharField(max_length=50, blank=True)

    dimensions_mm = models.CharField(max_length=50, blank=True)

    stock_location = models.CharField(max_length=100, blank=True)

    category_code = models.ForeignKey(
        MasterCode,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="category_items",
        limit_choices_to={"kind": MasterCode.CATEGORY},
    )

    gemstone_code = models.ForeignKey(
        MasterCode,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="gemstone_items",
        limit_choices_to={"kind": MasterCode.GEMSTONE},
    )

    color_code = models.ForeignKey(
        MasterCode,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="color_items",
        limit_choices_to={"kind": MasterCode.COLOR},
    )

    # Weight
    weight_value = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    weight_unit = models.CharField(
        max_length=5,
        choices=WEIGHT_UNIT_CHOICES,
        default=CARATS,
    )

    weight_ratti = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Weight in ratti, derived from weight value and unit",
    )

    # Pricing
    pricing_mode = models.CharField(
        max_length=20,
        choices=PRICING_MODE_CHOICES,
        default=FLAT,
    )

    selling_rate_per_carat = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    flat_selling_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=IN_STOCK,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "inventory_items"
        ordering = ["-created_at"]
        verbose_name = "Inventory Item"
        verbose_name_plural = "Inventory Items"
        indexes = [
            models.Index(fields=["status"], name="inv_status_idx"),
            models.Index(fields=["pricing_mode"], name="inv_pricing_mode_idx"),
        ]

    def __str__(self):
        return f"{self.sku} - {self.item_name}"

    def save(self, *args, **kwargs):
        """Keep the ratti weight in step with weight value and unit."""
        self.weight_ratti = self.calculate_ratti(self.weight_value, self.weight_unit)
        super().save(*args, **kwargs)

    @classmethod
    def calculate_ratti(cls, weight_value, weight_unit):
        """Convert a weight to ratti; unknown units convert to zero."""
        factor = cls.RATTI_FACTORS.get(weight_unit)
        if factor is None or weight_value is None:
            return Decimal("0.00")
        return (Decimal(weight_value) * factor).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    def rate_times_weight(self):
        """Selling rate per carat multiplied by weight; missing values count as zero."""
        rate = self.selling_rate_per_carat or Decimal("0")
        weight = self.weight_value or Decimal("0")
        return rate * weight

    def label_price(self):
        """
        Price printed on this item's label.

        Per-carat items use rate x weight. Flat items use the flat price,
        falling back to rate x weight when the flat price is absent or zero.
        """
        if self.pricing_mode == self.PER_CARAT:
            return self.rate_times_weight()
        return self.flat_selling_price or self.rate_times_weight()

    @property
    def color_name(self):
        return self.color_code.name if self.color_code_id else ""


class SkuSequence(models.Model):
    """
    Global counter for SKU uniqueness suffixes.

    A single row per sequence name, incremented under a row lock inside the
    transaction that inserts the inventory row.
    """

    DEFAULT = "sku"

    name = models.CharField(max_length=50, primary_key=True)

    value = models.BigIntegerField(default=0)

    class Meta:
        db_table = "inventory_sku_sequence"
        verbose_name = "SKU Sequence"
        verbose_name_plural = "SKU Sequences"

    def __str__(self):
        return f"{self.name}: {self.value}"
