from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("inventory", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="inventoryitem",
            name="weight_ratti",
            field=models.DecimalField(
                blank=True,
                decimal_places=2,
                help_text="Weight in ratti, derived from weight value and unit",
                max_digits=12,
                null=True,
            ),
        ),
    ]
