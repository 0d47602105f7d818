"""Host accounts for BnB Manage.

Хозяин жилья входит в кабинет по 4-значному коду доступа. Сам код не
хранится: в базе лежит HMAC-отпечаток, по которому код можно найти и
проверить, а уникальность кода обеспечивает индекс по отпечатку.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
from typing import Any

from django.conf import settings  # type: ignore
from django.contrib.auth.models import AbstractUser, UserManager  # type: ignore
from django.core.validators import RegexValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


PHONE_VALIDATOR = RegexValidator(
    regex=r"^\+?\d{7,15}$",
    message=_("Неверный формат телефона. Используйте международный формат без пробелов."),
)


def access_code_digest(code: str) -> str:
    """Keyed digest of a host access code, used for lookup and uniqueness."""
    key = settings.SECRET_KEY.encode()
    return hmac.new(key, str(code).strip().encode(), hashlib.sha256).hexdigest()


class CustomUserManager(UserManager):
    """Менеджер хозяев: создание по коду доступа и поиск по коду."""

    use_in_migrations = True

    def create_host(self, display_name: str, access_code: str, **extra_fields: Any):
        extra_fields.setdefault("username", f"host-{secrets.token_hex(4)}")
        phone = extra_fields.get("phone")
        if phone:
            extra_fields["phone"] = self.normalize_phone(phone)
        user = self.model(display_name=display_name, **extra_fields)
        user.set_access_code(access_code)
        user.set_unusable_password()
        user.save(using=self._db)
        return user

    def get_by_access_code(self, access_code: str):
        return self.get(access_code_digest=access_code_digest(access_code), is_active=True)

    def access_code_taken(self, access_code: str) -> bool:
        return self.filter(access_code_digest=access_code_digest(access_code)).exists()

    @staticmethod
    def normalize_phone(phone: str) -> str:
        """Удаляем пробелы и дефисы для унификации хранения телефона."""
        return phone.replace(" ", "").replace("-", "")


class CustomUser(AbstractUser):
    """Хозяин жилья (или сотрудник поддержки с флагом is_staff)."""

    display_name = models.CharField(_("Имя"), max_length=150, blank=True)
    business_name = models.CharField(_("Название объекта"), max_length=255, blank=True)
    phone = models.CharField(
        _("Телефон"),
        max_length=20,
        blank=True,
        validators=[PHONE_VALIDATOR],
    )
    access_code_digest = models.CharField(
        max_length=64,
        unique=True,
        null=True,
        blank=True,
        editable=False,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    class Meta:
        verbose_name = _("Хозяин")
        verbose_name_plural = _("Хозяева")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.business_name or self.display_name or self.username

    def set_access_code(self, code: str) -> None:
        self.access_code_digest = access_code_digest(code)

    def check_access_code(self, code: str) -> bool:
        if not self.access_code_digest:
            return False
        return hmac.compare_digest(self.access_code_digest, access_code_digest(code))


User = CustomUser
