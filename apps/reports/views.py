import logging

from django.http import HttpResponse
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound, PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter, PolymorphicProxySerializer
from drf_spectacular.types import OpenApiTypes

from apps.farmers.models import Farmer
from apps.farmers.services import FarmerNotFoundError

from .exceptions import ReportsServiceError
from .exporters import report_to_csv, csv_filename
from .reports import generate_report, dashboard_stats
from .serializers import (
    # Input serializers
    ReportQuerySerializer,
    # Response serializers
    DailyReportSerializer,
    FarmerReportSerializer,
    MonthlyReportSerializer,
    QualityReportSerializer,
    FarmerStatementSerializer,
    DashboardResponseSerializer,
    ErrorSerializer,
)

logger = logging.getLogger(__name__)

REPORT_PARAMETERS = [
    OpenApiParameter(
        'report_type', OpenApiTypes.STR, OpenApiParameter.PATH,
        enum=['daily', 'farmer', 'monthly', 'quality', 'farmer_statement'],
    ),
    OpenApiParameter('start_date', OpenApiTypes.DATE, description='Start date (YYYY-MM-DD)'),
    OpenApiParameter('end_date', OpenApiTypes.DATE, description='End date (YYYY-MM-DD)'),
    OpenApiParameter('farmer', OpenApiTypes.UUID, description='Farmer ID (farmer_statement only)'),
]


def _build_report(request, report_type):
    """
    Validate the query, enforce report access and build the report data.

    Staff may run every report. A farmer may only run farmer_statement,
    and only for their own record; the farmer parameter defaults to it.
    """
    query_serializer = ReportQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data
    farmer_id = params.get('farmer')
    user = request.user

    if not user.is_operator_or_admin:
        own = Farmer.objects.filter(user=user).first()
        if report_type != 'farmer_statement' or own is None:
            raise PermissionDenied('Farmers can only view their own statement.')
        if farmer_id is None:
            farmer_id = own.id
        elif farmer_id != own.id:
            raise PermissionDenied('Farmers can only view their own statement.')

    try:
        return generate_report(
            report_type,
            start_date=params.get('start_date'),
            end_date=params.get('end_date'),
            farmer_id=farmer_id,
        ), params
    except FarmerNotFoundError:
        raise NotFound('Farmer not found.')


@extend_schema(
    parameters=REPORT_PARAMETERS,
    responses={
        200: PolymorphicProxySerializer(
            component_name='Report',
            serializers=[
                DailyReportSerializer,
                FarmerReportSerializer,
                MonthlyReportSerializer,
                QualityReportSerializer,
                FarmerStatementSerializer,
            ],
            resource_type_field_name=None,
        ),
        400: ErrorSerializer,
    },
    description="Generate a report over deliveries in an optional date range.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def report(request, report_type):
    """Report data as JSON - thin HTTP handler."""
    try:
        data, _ = _build_report(request, report_type)
    except ReportsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(data)


@extend_schema(
    parameters=REPORT_PARAMETERS,
    responses={
        (200, 'text/csv'): OpenApiTypes.STR,
        400: ErrorSerializer,
    },
    description="Download a report as CSV.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def export_report(request, report_type):
    """Report data as a CSV attachment."""
    try:
        data, params = _build_report(request, report_type)
        content = report_to_csv(report_type, data)
    except ReportsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    filename = csv_filename(report_type, params.get('start_date'), params.get('end_date'))
    response = HttpResponse(content, content_type='text/csv')
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    logger.info("User %s exported %s report", request.user.username, report_type)
    return response


@extend_schema(
    responses={200: DashboardResponseSerializer},
    description="Today's deliveries, pending payments and recent deliveries.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard(request):
    """Dashboard counters for the current user."""
    return Response(dashboard_stats(request.user))
