import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("inventory", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="PrintJob",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "print_format",
                    models.JSONField(
                        default=dict,
                        help_text="Snapshot of the print format configuration used for this job",
                    ),
                ),
                ("total_items", models.PositiveIntegerField(default=0)),
                (
                    "owner",
                    models.ForeignKey(
                        db_constraint=False,
                        help_text="User who created the job",
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="print_jobs",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Print Job",
                "verbose_name_plural": "Print Jobs",
                "db_table": "label_print_jobs",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["-created_at"], name="print_job_created_idx"),
                    models.Index(fields=["owner"], name="print_job_owner_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="PrintJobLine",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("position", models.PositiveIntegerField(default=0)),
                ("sku", models.CharField(max_length=100)),
                ("price_amount", models.DecimalField(decimal_places=2, max_digits=14)),
                ("encoded_string", models.CharField(max_length=32)),
                ("checksum_digit", models.PositiveSmallIntegerField()),
                ("checksum_method", models.CharField(default="MOD9", max_length=16)),
                ("encoding_version", models.PositiveSmallIntegerField(default=1)),
                (
                    "job",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="lines",
                        to="labels.printjob",
                    ),
                ),
            ],
            options={
                "verbose_name": "Print Job Line",
                "verbose_name_plural": "Print Job Lines",
                "db_table": "label_print_job_lines",
                "ordering": ["job", "position"],
                "indexes": [models.Index(fields=["sku"], name="print_job_line_sku_idx")],
            },
        ),
        migrations.CreateModel(
            name="LabelCartItem",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("added_at", models.DateTimeField(auto_now_add=True)),
                (
                    "inventory",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="label_cart_items",
                        to="inventory.inventoryitem",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="label_cart_items",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Label Cart Item",
                "verbose_name_plural": "Label Cart Items",
                "db_table": "label_cart_items",
                "ordering": ["-added_at"],
                "unique_together": {("user", "inventory")},
            },
        ),
    ]
