import django.db.models.deletion
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
                ("name", models.CharField(max_length=150, verbose_name="Имя гостя")),
                ("phone", models.CharField(blank=True, max_length=32, verbose_name="Телефон")),
                ("check_in", models.DateField(verbose_name="Дата заезда")),
                ("check_out", models.DateField(verbose_name="Дата выезда")),
                (
                    "payment_status",
                    models.CharField(
                        choices=[("unpaid", "Не оплачено"), ("paid", "Оплачено")],
                        default="unpaid",
                        max_length=10,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "owner",
                    models.ForeignKey(
                        blank=True,
                        help_text="Хозяин, которому принадлежит бронь. Пусто - общий календарь.",
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Бронирование",
                "verbose_name_plural": "Бронирования",
                "ordering": ["check_in", "id"],
                "indexes": [
                    models.Index(fields=["owner", "check_in", "check_out"], name="booking_owner_dates_idx"),
                    models.Index(fields=["payment_status"], name="booking_payment_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(check_out__gt=models.F("check_in")),
                        name="booking_valid_dates",
                    )
                ],
            },
        ),
    ]
