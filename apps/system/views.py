import logging

from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsStaffRole

from .models import SystemSettings
from .serializers import SystemSettingsSerializer

logger = logging.getLogger(__name__)


@extend_schema(
    methods=['GET'],
    responses={200: SystemSettingsSerializer},
    description="Get the current price per liter and SMS configuration.",
    tags=['system'],
)
@extend_schema(
    methods=['PATCH'],
    request=SystemSettingsSerializer,
    responses={200: SystemSettingsSerializer},
    description="Update system settings (admin only).",
    tags=['system'],
)
@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated, IsStaffRole])
def system_settings(request):
    """Read or update the system settings singleton."""
    settings_obj = SystemSettings.load()

    if request.method == 'GET':
        return Response(SystemSettingsSerializer(settings_obj).data)

    if not request.user.is_admin:
        raise PermissionDenied('Only administrators can change system settings.')

    serializer = SystemSettingsSerializer(settings_obj, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    serializer.save()
    logger.info(
        "System settings updated by %s: %s",
        request.user.username,
        sorted(k for k in serializer.validated_data if k != 'sms_api_key'),
    )
    return Response(serializer.data)
