from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter

from apps.accounts.permissions import IsStaffOrFarmerReadOnly, IsStaffRole

from .models import Payment
from .serializers import (
    PaymentSerializer,
    PaymentFilterSerializer,
    ProcessPaymentInputSerializer,
    ProcessAllInputSerializer,
    ProcessResultSerializer,
    ProcessAllResultSerializer,
)
from .services import (
    process_payment,
    process_all_pending_payments,
    PAYMENT_NOT_FOUND,
)


class PaymentPagination(PageNumberPagination):
    """Pagination for payment listings."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema_view(
    list=extend_schema(
        parameters=[
            OpenApiParameter('status', str, description='pending or paid'),
            OpenApiParameter('period', str, description='YYYY-MM'),
            OpenApiParameter('farmer', str, description='Filter by farmer ID'),
        ],
        description="List monthly payment records. Farmers only see their own.",
        tags=['payments'],
    ),
    retrieve=extend_schema(description="Get a payment record.", tags=['payments']),
)
class PaymentViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Monthly payment ledger.

    Rows are created and kept up to date by the delivery services; this
    viewset only lists them and settles pending ones.
    """

    queryset = Payment.objects.select_related('farmer')
    serializer_class = PaymentSerializer
    permission_classes = [IsAuthenticated, IsStaffOrFarmerReadOnly]
    pagination_class = PaymentPagination
    lookup_value_regex = r'[0-9a-fA-F-]{36}'

    def get_permissions(self):
        if self.action in ['process', 'process_all']:
            return [IsAuthenticated(), IsStaffRole()]
        return super().get_permissions()

    def get_queryset(self):
        """Filter payments using input serializer validation."""
        queryset = super().get_queryset()
        user = self.request.user

        if user.is_farmer:
            queryset = queryset.filter(farmer__user=user)

        filter_serializer = PaymentFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if 'status' in params:
            queryset = queryset.filter(status=params['status'])
        if 'period' in params:
            queryset = queryset.filter(period=params['period'])
        if 'farmer' in params:
            queryset = queryset.filter(farmer_id=params['farmer'])

        return queryset

    @extend_schema(
        request=ProcessPaymentInputSerializer,
        responses={
            200: ProcessResultSerializer,
            400: ProcessResultSerializer,
            404: ProcessResultSerializer,
        },
        description="Mark a pending payment as paid and notify the farmer by SMS.",
        tags=['payments'],
    )
    @action(detail=True, methods=['post'])
    def process(self, request, pk=None):
        """
        Settle one payment.

        POST /api/payments/{id}/process/
        Body: {"payment_method": "mobile_money", "transaction_id": "MM123"}
        """
        serializer = ProcessPaymentInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = process_payment(pk, **serializer.validated_data)
        payment = result['payment']
        body = {
            'success': result['success'],
            'message': result['message'],
            'payment': PaymentSerializer(payment).data if payment else None,
        }

        if result['success']:
            return Response(body)
        if result['message'] == PAYMENT_NOT_FOUND:
            return Response(body, status=status.HTTP_404_NOT_FOUND)
        return Response(body, status=status.HTTP_400_BAD_REQUEST)

    @extend_schema(
        request=ProcessAllInputSerializer,
        responses={
            200: ProcessAllResultSerializer,
            400: ProcessAllResultSerializer,
        },
        description="Settle every pending payment and notify each farmer.",
        tags=['payments'],
    )
    @action(detail=False, methods=['post'], url_path='process-all')
    def process_all(self, request):
        """
        Settle all pending payments.

        POST /api/payments/process-all/
        """
        serializer = ProcessAllInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = process_all_pending_payments(**serializer.validated_data)
        response_status = status.HTTP_200_OK if result['success'] else status.HTTP_400_BAD_REQUEST
        return Response(result, status=response_status)
