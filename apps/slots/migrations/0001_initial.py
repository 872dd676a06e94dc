from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Slot",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("slot_date", models.DateField(verbose_name="Date")),
                ("slot_time", models.CharField(max_length=5, verbose_name="Time")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Available", "Available"),
                            ("Unavailable", "Unavailable"),
                            ("Maintenance", "Maintenance"),
                        ],
                        default="Available",
                        max_length=16,
                        verbose_name="Status",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "Slot",
                "verbose_name_plural": "Slots",
                "ordering": ["slot_date", "slot_time"],
                "indexes": [models.Index(fields=["slot_date", "status"], name="slot_date_status_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("slot_date", "slot_time"), name="slot_date_time_unique"),
                ],
            },
        ),
    ]
