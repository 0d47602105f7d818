"""Serializers for host authentication flows (register, login by access code)."""

from __future__ import annotations

import logging
from typing import Any

from django.conf import settings  # type: ignore
from django.contrib.auth import get_user_model  # type: ignore
from django.db import IntegrityError, transaction  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import PHONE_VALIDATOR

logger = logging.getLogger(__name__)

User = get_user_model()

CODE_TAKEN_MESSAGE = "Этот код уже используется другим хозяином, выберите другой."


def _validate_code_format(value: str) -> str:
    length = settings.HOST_ACCESS_CODE_LENGTH
    value = value.strip()
    if len(value) != length or not value.isdigit():
        raise serializers.ValidationError(f"Код доступа должен состоять из {length} цифр.")
    return value


class RegisterSerializer(serializers.Serializer):
    display_name = serializers.CharField(max_length=150)
    business_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    phone = serializers.CharField(required=False, allow_blank=True)
    access_code = serializers.CharField(write_only=True)

    def validate_phone(self, value: str) -> str:
        value = User.objects.normalize_phone(value)
        if value:
            PHONE_VALIDATOR(value)
        return value

    def validate_access_code(self, value: str) -> str:
        value = _validate_code_format(value)
        if User.objects.access_code_taken(value):
            raise serializers.ValidationError(CODE_TAKEN_MESSAGE)
        return value

    def create(self, validated_data: dict[str, Any]):  # type: ignore
        access_code = validated_data.pop("access_code")
        display_name = validated_data.pop("display_name")
        try:
            with transaction.atomic():
                host = User.objects.create_host(display_name, access_code, **validated_data)
        except IntegrityError:
            # another registration took the code after validation
            raise serializers.ValidationError({"access_code": [CODE_TAKEN_MESSAGE]})
        logger.info(f"Host registered: id={host.pk}, business={host.business_name!r}")
        return host


class LoginSerializer(serializers.Serializer):
    access_code = serializers.CharField(write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        code = _validate_code_format(attrs.get("access_code", ""))
        try:
            host = User.objects.get_by_access_code(code)
        except User.DoesNotExist:
            logger.warning("Host login rejected: unknown access code")
            raise serializers.ValidationError({"access_code": "Неверный код доступа."})

        attrs["user"] = host
        return attrs
