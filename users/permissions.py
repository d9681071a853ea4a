from django.contrib.auth.mixins import LoginRequiredMixin
from django.http import JsonResponse
from rest_framework.permissions import BasePermission

from .models import is_admin


def wants_json(request):
    """True for fetch/XHR style requests that expect a JSON answer."""
    content_type = request.headers.get('Content-Type', '')
    accept = request.headers.get('Accept', '')
    return (
        'application/json' in content_type
        or 'application/json' in accept
        or request.headers.get('X-Requested-With') == 'XMLHttpRequest'
    )


class LoginRequiredJSONMixin(LoginRequiredMixin):
    """
    LoginRequiredMixin that answers JSON callers with 401 instead of
    redirecting them to the login page.
    """

    def handle_no_permission(self):
        if not self.request.user.is_authenticated and wants_json(self.request):
            return JsonResponse({}, status=401)
        return super().handle_no_permission()


class IsAdminRole(BasePermission):
    """Authenticated users whose profile role is admin (or superusers)."""

    message = 'Admin role required'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and is_admin(request.user))
