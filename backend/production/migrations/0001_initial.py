import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Formulation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("batch_size_kg", models.DecimalField(decimal_places=3, default=0, max_digits=12)),
                ("cost_per_kg", models.DecimalField(decimal_places=4, default=0, max_digits=12)),
                ("status", models.CharField(choices=[("DRAFT", "Draft"), ("FINALIZED", "Finalized"), ("ARCHIVED", "Archived")], default="DRAFT", max_length=16)),
                ("notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "formulations",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="PelletingBatch",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("target_quantity_kg", models.DecimalField(decimal_places=3, max_digits=12)),
                ("machine_used", models.CharField(blank=True, default="", max_length=100)),
                ("operator_name", models.CharField(blank=True, default="", max_length=100)),
                ("status", models.CharField(choices=[("NOT_STARTED", "Not Started"), ("IN_PROGRESS", "In Progress"), ("COMPLETED", "Completed")], default="NOT_STARTED", max_length=16)),
                ("actual_yield_kg", models.DecimalField(decimal_places=3, default=0, max_digits=12)),
                ("total_wastage_kg", models.DecimalField(decimal_places=3, default=0, max_digits=12)),
                ("operator_comments", models.TextField(blank=True, default="")),
                ("leftover_raw_materials", models.JSONField(blank=True, default=list)),
                ("start_time", models.DateTimeField(blank=True, null=True)),
                ("end_time", models.DateTimeField(blank=True, null=True)),
                ("archived", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("formulation", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="batches", to="production.formulation")),
            ],
            options={
                "db_table": "pelleting_batches",
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["status", "archived"], name="pellet_batch_status_idx")],
            },
        ),
    ]
