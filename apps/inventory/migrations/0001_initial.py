import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="MasterCode",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                (
                    "kind",
                    models.CharField(
                        choices=[
                            ("CATEGORY", "Category"),
                            ("GEMSTONE", "Gemstone"),
                            ("COLOR", "Color"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "name",
                    models.CharField(
                        help_text="Display name (e.g., 'Loose Gemstone', 'Amethyst', 'Purple')",
                        max_length=100,
                    ),
                ),
                (
                    "code",
                    models.CharField(
                        help_text="Uppercase alphanumeric code used in SKUs", max_length=10
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "Master Code",
                "verbose_name_plural": "Master Codes",
                "db_table": "inventory_master_codes",
                "ordering": ["kind", "code"],
                "unique_together": {("kind", "code")},
            },
        ),
        migrations.CreateModel(
            name="SkuSequence",
            fields=[
                ("name", models.CharField(max_length=50, primary_key=True, serialize=False)),
                ("value", models.BigIntegerField(default=0)),
            ],
            options={
                "verbose_name": "SKU Sequence",
                "verbose_name_plural": "SKU Sequences",
                "db_table": "inventory_sku_sequence",
            },
        ),
        migrations.CreateModel(
            name="InventoryItem",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for the inventory item",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "sku",
                    models.CharField(
                        help_text="Stock Keeping Unit, assigned once at creation",
                        max_length=100,
                        unique=True,
                    ),
                ),
                (
                    "item_name",
                    models.CharField(
                        help_text="Item name (e.g., 'Natural Amethyst Oval')", max_length=255
                    ),
                ),
                ("gem_type", models.CharField(blank=True, max_length=100)),
                ("shape", models.CharField(blank=True, max_length=50)),
                ("dimensions_mm", models.CharField(blank=True, max_length=50)),
                ("stock_location", models.CharField(blank=True, max_length=100)),
                (
                    "weight_value",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                (
                    "weight_unit",
                    models.CharField(
                        choices=[("cts", "Carats"), ("gms", "Grams")], default="cts", max_length=5
                    ),
                ),
                (
                    "weight_ratti",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Weight in ratti, derived from weight value and unit",
                        max_digits=10,
                        null=True,
                    ),
                ),
                (
                    "pricing_mode",
                    models.CharField(
                        choices=[("PER_CARAT", "Per Carat"), ("FLAT", "Flat")],
                        default="FLAT",
                        max_length=20,
                    ),
                ),
                (
                    "selling_rate_per_carat",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        max_digits=12,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                (
                    "flat_selling_price",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        max_digits=12,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("IN_STOCK", "In Stock"),
                            ("RESERVED", "Reserved"),
                            ("SOLD", "Sold"),
                        ],
                        default="IN_STOCK",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "category_code",
                    models.ForeignKey(
                        blank=True,
                        limit_choices_to={"kind": "CATEGORY"},
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="category_items",
                        to="inventory.mastercode",
                    ),
                ),
                (
                    "color_code",
                    models.ForeignKey(
                        blank=True,
                        limit_choices_to={"kind": "COLOR"},
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="color_items",
                        to="inventory.mastercode",
                    ),
                ),
                (
                    "gemstone_code",
                    models.ForeignKey(
                        blank=True,
                        limit_choices_to={"kind": "GEMSTONE"},
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="gemstone_items",
                        to="inventory.mastercode",
                    ),
                ),
            ],
            options={
                "verbose_name": "Inventory Item",
                "verbose_name_plural": "Inventory Items",
                "db_table": "inventory_items",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status"], name="inv_status_idx"),
                    models.Index(fields=["pricing_mode"], name="inv_pricing_mode_idx"),
                ],
            },
        ),
    ]
