"""Views for host authentication flows (register, login, token refresh, profile)."""

from __future__ import annotations

import logging

from django.contrib.auth import user_logged_in  # type: ignore
from rest_framework import generics, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken  # type: ignore

from .auth_serializers import LoginSerializer, RegisterSerializer
from .serializers import HostSerializer

logger = logging.getLogger(__name__)


def _tokens_for_user(user) -> dict[str, str]:
    refresh = RefreshToken.for_user(user)
    return {"refresh": str(refresh), "access": str(refresh.access_token)}


class RegisterView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        host = serializer.save()
        data = {
            "user": HostSerializer(host, context={"request": request}).data,
            "tokens": _tokens_for_user(host),
        }
        return Response(data, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        host = serializer.validated_data["user"]
        user_logged_in.send(sender=host.__class__, request=request, user=host)
        logger.info(f"Host logged in: id={host.pk}")
        data = {
            "user": HostSerializer(host, context={"request": request}).data,
            "tokens": _tokens_for_user(host),
        }
        return Response(data, status=status.HTTP_200_OK)


class MeView(generics.RetrieveUpdateAPIView):
    """Профиль текущего хозяина."""

    serializer_class = HostSerializer
    permission_classes = [IsAuthenticated]
    http_method_names = ["get", "patch", "head", "options"]

    def get_object(self):  # type: ignore
        return self.request.user
