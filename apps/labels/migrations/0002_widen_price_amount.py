from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("labels", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="printjobline",
            name="price_amount",
            field=models.DecimalField(decimal_places=2, max_digits=22),
        ),
    ]
