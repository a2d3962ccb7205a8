from drf_yasg import openapi
from rest_framework import permissions
from core.constants import Role


class IsAdmin(permissions.BasePermission):
    def has_permission(self, request, view):
        if not request.user.is_authenticated:
            return False
        return request.user.is_superuser or request.user.role == Role.ADMIN


ERROR_SCHEMA = openapi.Schema(
    type=openapi.TYPE_OBJECT,
    properties={
        'error': openapi.Schema(type=openapi.TYPE_STRING),
        'code': openapi.Schema(type=openapi.TYPE_STRING),
    }
)


def error_response(description):
    """drf-yasg response documenting the ``{"error", "code"}`` body."""
    return openapi.Response(description, ERROR_SCHEMA)
