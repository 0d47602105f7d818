"""Serializers for host profile endpoints."""

from __future__ import annotations

from urllib.parse import urlencode

from django.contrib.auth import get_user_model  # type: ignore
from django.urls import reverse  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class HostSerializer(serializers.ModelSerializer):
    """Профиль хозяина и ссылка на форму регистрации гостей."""

    guest_form_url = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "display_name",
            "business_name",
            "phone",
            "guest_form_url",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "guest_form_url",
            "created_at",
            "updated_at",
        ]

    def get_guest_form_url(self, obj) -> str:  # type: ignore
        path = f"{reverse('booking-list')}?{urlencode({'host': obj.pk})}"
        request = self.context.get("request")
        return request.build_absolute_uri(path) if request else path
