from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="FeeConfiguration",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                ("description", models.TextField(blank=True, default="")),
                ("pelleting_fee_type", models.CharField(choices=[("PER_KG", "Per Kg"), ("PER_BATCH", "Per Batch (fixed)")], default="PER_KG", max_length=16)),
                ("pelleting_fee", models.DecimalField(decimal_places=4, default=0, max_digits=12)),
                ("system_fee_percent", models.DecimalField(decimal_places=2, default=0, max_digits=5)),
                ("formulation_fee_type", models.CharField(choices=[("PER_KG", "Per Kg"), ("PER_BATCH", "Per Batch (fixed)")], default="PER_KG", max_length=16)),
                ("formulation_fee", models.DecimalField(decimal_places=4, default=0, max_digits=12)),
                ("active", models.BooleanField(default=True)),
                ("archived", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "fee_configurations",
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["active", "archived"], name="fee_config_active_archived_idx")],
            },
        ),
    ]
