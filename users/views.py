# users/views.py
import logging

from django.contrib.auth.models import User
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .permissions import IsAdminRole
from .serializers import UserSerializer

logger = logging.getLogger(__name__)


class UserViewSet(viewsets.ModelViewSet):
    """
    Admin-only user management.
    PUT behaves as a partial update so email, role and password can be
    changed independently.
    """
    queryset = User.objects.select_related('profile').order_by('id')
    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]

    def perform_create(self, serializer):
        user = serializer.save()
        logger.info(f"User {user.email} created by {self.request.user.email} (role: {user.profile.role})")

    def update(self, request, *args, **kwargs):
        kwargs['partial'] = True
        return super().update(request, *args, **kwargs)

    def perform_update(self, serializer):
        user = serializer.save()
        logger.info(f"User {user.email} updated by {self.request.user.email}")

    def destroy(self, request, *args, **kwargs):
        user = self.get_object()
        email = user.email
        user.delete()
        logger.warning(f"[AUDIT] User {email} deleted by {request.user.email}")
        return Response({'message': f'User {email} deleted'}, status=status.HTTP_200_OK)
