from rest_framework import status, viewsets
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter

from apps.accounts.permissions import IsStaffOrFarmerReadOnly
from apps.farmers.services import FarmerNotFoundError

from .models import Delivery
from .serializers import DeliverySerializer, DeliveryInputSerializer, DeliveryFilterSerializer
from .services import (
    record_delivery,
    update_delivery,
    delete_delivery,
    DeliveryNotFoundError,
    InvalidQuantityError,
    InvalidQualityError,
)


class DeliveryPagination(PageNumberPagination):
    """Pagination for delivery listings."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema_view(
    list=extend_schema(
        parameters=[
            OpenApiParameter('farmer', str, description='Filter by farmer ID'),
            OpenApiParameter('quality', str, description='Filter by grade (A, B, C)'),
            OpenApiParameter('date_from', str, description='From date (YYYY-MM-DD)'),
            OpenApiParameter('date_to', str, description='To date (YYYY-MM-DD)'),
        ],
        description="List deliveries, newest first. Farmers only see their own.",
        tags=['deliveries'],
    ),
    retrieve=extend_schema(description="Get a delivery.", tags=['deliveries']),
    create=extend_schema(
        request=DeliveryInputSerializer,
        responses={201: DeliverySerializer},
        description="Record a delivery. Updates the farmer's monthly payment and sends an SMS.",
        tags=['deliveries'],
    ),
    update=extend_schema(
        request=DeliveryInputSerializer,
        responses={200: DeliverySerializer},
        description="Replace a delivery. The amount is recomputed at the current price.",
        tags=['deliveries'],
    ),
    partial_update=extend_schema(
        request=DeliveryInputSerializer,
        responses={200: DeliverySerializer},
        description="Edit a delivery. The amount is recomputed at the current price.",
        tags=['deliveries'],
    ),
    destroy=extend_schema(
        description="Delete a delivery and reverse it from the payment ledger.",
        tags=['deliveries'],
    ),
)
class DeliveryViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Delivery CRUD operations.

    Every write goes through the delivery services so the payment
    ledger stays in step with the deliveries table.
    """

    queryset = Delivery.objects.select_related('farmer')
    serializer_class = DeliverySerializer
    permission_classes = [IsAuthenticated, IsStaffOrFarmerReadOnly]
    pagination_class = DeliveryPagination
    lookup_value_regex = r'[0-9a-fA-F-]{36}'

    def get_queryset(self):
        """Filter deliveries using input serializer validation."""
        queryset = super().get_queryset()
        user = self.request.user

        if user.is_farmer:
            queryset = queryset.filter(farmer__user=user)

        filter_serializer = DeliveryFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if 'farmer' in params:
            queryset = queryset.filter(farmer_id=params['farmer'])
        if 'quality' in params:
            queryset = queryset.filter(quality=params['quality'])
        if 'date_from' in params:
            queryset = queryset.filter(date__gte=params['date_from'])
        if 'date_to' in params:
            queryset = queryset.filter(date__lte=params['date_to'])

        return queryset

    def create(self, request, *args, **kwargs):
        serializer = DeliveryInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            delivery = record_delivery(**serializer.to_service_kwargs())
        except FarmerNotFoundError:
            raise ValidationError({'farmer': ['Farmer not found.']})
        except InvalidQuantityError as e:
            raise ValidationError({'quantity': [str(e)]})
        except InvalidQualityError as e:
            raise ValidationError({'quality': [str(e)]})

        return Response(DeliverySerializer(delivery).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = DeliveryInputSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            delivery = update_delivery(delivery_id=kwargs['pk'], **serializer.to_service_kwargs())
        except DeliveryNotFoundError:
            raise NotFound('Delivery not found.')
        except FarmerNotFoundError:
            raise ValidationError({'farmer': ['Farmer not found.']})
        except InvalidQuantityError as e:
            raise ValidationError({'quantity': [str(e)]})
        except InvalidQualityError as e:
            raise ValidationError({'quality': [str(e)]})

        return Response(DeliverySerializer(delivery).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_delivery(delivery_id=kwargs['pk'])
        except DeliveryNotFoundError:
            raise NotFound('Delivery not found.')

        return Response(status=status.HTTP_204_NO_CONTENT)
