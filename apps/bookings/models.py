"""Booking domain models for BnB Manage."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Booking(models.Model):
    """Проживание гостя: имя, телефон и даты заезда/выезда."""

    class PaymentStatus(models.TextChoices):
        UNPAID = "unpaid", _("Не оплачено")
        PAID = "paid", _("Оплачено")

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="bookings",
        help_text=_("Хозяин, которому принадлежит бронь. Пусто - общий календарь."),
    )
    name = models.CharField(_("Имя гостя"), max_length=150)
    phone = models.CharField(_("Телефон"), max_length=32, blank=True)
    check_in = models.DateField(_("Дата заезда"))
    check_out = models.DateField(_("Дата выезда"))
    payment_status = models.CharField(
        max_length=10,
        choices=PaymentStatus.choices,
        default=PaymentStatus.UNPAID,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Бронирование")
        verbose_name_plural = _("Бронирования")
        ordering = ["check_in", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(check_out__gt=models.F("check_in")),
                name="booking_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["owner", "check_in", "check_out"], name="booking_owner_dates_idx"),
            models.Index(fields=["payment_status"], name="booking_payment_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name}: {self.check_in} - {self.check_out}"

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    def toggle_payment(self) -> None:
        self.payment_status = (
            self.PaymentStatus.UNPAID if self.payment_status == self.PaymentStatus.PAID else self.PaymentStatus.PAID
        )
        self.save(update_fields=["payment_status", "updated_at"])
