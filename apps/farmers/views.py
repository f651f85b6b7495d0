from django.db.models import Q
from rest_framework import status, viewsets
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter

from apps.accounts.permissions import IsStaffOrFarmerReadOnly

from .models import Farmer
from .serializers import FarmerSerializer, FarmerInputSerializer, FarmerFilterSerializer
from .services import (
    register_farmer,
    update_farmer,
    delete_farmer,
    FarmerNotFoundError,
    DuplicatePhoneError,
)


class FarmerPagination(PageNumberPagination):
    """Pagination for farmer listings."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema_view(
    list=extend_schema(
        parameters=[OpenApiParameter('search', str, description='Filter by name, phone or location')],
        description="List farmers. Farmers only see their own record.",
        tags=['farmers'],
    ),
    retrieve=extend_schema(description="Get a farmer.", tags=['farmers']),
    create=extend_schema(
        request=FarmerInputSerializer,
        responses={201: FarmerSerializer},
        description="Register a farmer. Creates a login (phone number + default password) and sends a welcome SMS.",
        tags=['farmers'],
    ),
    update=extend_schema(
        request=FarmerInputSerializer,
        responses={200: FarmerSerializer},
        description="Replace a farmer's details.",
        tags=['farmers'],
    ),
    partial_update=extend_schema(
        request=FarmerInputSerializer,
        responses={200: FarmerSerializer},
        description="Edit a farmer's details.",
        tags=['farmers'],
    ),
    destroy=extend_schema(
        description="Delete a farmer with their deliveries, payments and login.",
        tags=['farmers'],
    ),
)
class FarmerViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Farmer CRUD operations.

    list: Get farmers (filterable by search term)
    create: Register a farmer
    retrieve: Get a specific farmer
    update: Edit a farmer
    destroy: Delete a farmer and everything recorded for them
    """

    queryset = Farmer.objects.all()
    serializer_class = FarmerSerializer
    permission_classes = [IsAuthenticated, IsStaffOrFarmerReadOnly]
    pagination_class = FarmerPagination
    lookup_value_regex = r'[0-9a-fA-F-]{36}'

    def get_queryset(self):
        queryset = super().get_queryset()
        user = self.request.user

        if user.is_farmer:
            return queryset.filter(user=user)

        filter_serializer = FarmerFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        search = filter_serializer.validated_data.get('search')
        if search:
            queryset = queryset.filter(
                Q(name__icontains=search) |
                Q(phone__icontains=search) |
                Q(location__icontains=search)
            )
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = FarmerInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            farmer = register_farmer(**serializer.validated_data)
        except DuplicatePhoneError as e:
            raise ValidationError({'phone': [str(e)]})

        return Response(FarmerSerializer(farmer).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = FarmerInputSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            farmer = update_farmer(farmer_id=kwargs['pk'], **serializer.validated_data)
        except FarmerNotFoundError:
            raise NotFound('Farmer not found.')
        except DuplicatePhoneError as e:
            raise ValidationError({'phone': [str(e)]})

        return Response(FarmerSerializer(farmer).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_farmer(farmer_id=kwargs['pk'])
        except FarmerNotFoundError:
            raise NotFound('Farmer not found.')

        return Response(status=status.HTTP_204_NO_CONTENT)
