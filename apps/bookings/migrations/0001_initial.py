import django.db.models.deletion
from decimal import Decimal

from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("booking_date", models.DateField(verbose_name="Booking date")),
                ("slot_time_from", models.CharField(max_length=5, verbose_name="From")),
                ("slot_time_to", models.CharField(max_length=5, verbose_name="To")),
                (
                    "amount",
                    models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10, verbose_name="Amount"),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Booking",
                "verbose_name_plural": "Bookings",
                "ordering": ["-booking_date", "slot_time_from"],
                "indexes": [models.Index(fields=["user", "booking_date"], name="booking_user_date_idx")],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("amount__gte", 0)), name="booking_amount_non_negative"),
                ],
            },
        ),
    ]
