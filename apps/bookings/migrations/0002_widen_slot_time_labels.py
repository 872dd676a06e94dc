from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("bookings", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="booking",
            name="slot_time_from",
            field=models.CharField(max_length=8, verbose_name="From"),
        ),
        migrations.AlterField(
            model_name="booking",
            name="slot_time_to",
            field=models.CharField(max_length=8, verbose_name="To"),
        ),
    ]
