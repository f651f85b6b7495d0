from decimal import Decimal

from rest_framework import serializers

from .models import Delivery, QualityGrade, MIN_QUANTITY


class DeliverySerializer(serializers.ModelSerializer):
    """Delivery representation for listings and detail views."""

    farmer_name = serializers.CharField(source='farmer.name', read_only=True)
    time = serializers.TimeField(format='%H:%M', read_only=True)

    class Meta:
        model = Delivery
        fields = [
            'id',
            'farmer',
            'farmer_name',
            'quantity',
            'quality',
            'date',
            'time',
            'notes',
            'amount',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class DeliveryInputSerializer(serializers.Serializer):
    """Delivery recording / edit form."""

    farmer = serializers.UUIDField()
    quantity = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=MIN_QUANTITY,
        error_messages={'min_value': f'Quantity must be at least {MIN_QUANTITY}L.'},
    )
    quality = serializers.ChoiceField(choices=QualityGrade.choices)
    date = serializers.DateField()
    time = serializers.TimeField(input_formats=['%H:%M', '%H:%M:%S'])
    notes = serializers.CharField(required=False, allow_blank=True)

    def to_service_kwargs(self):
        data = dict(self.validated_data)
        if 'farmer' in data:
            data['farmer_id'] = data.pop('farmer')
        return data


class DeliveryFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for delivery filtering.

    Query Parameters:
        farmer (UUID): Filter by farmer ID
        quality (str): Filter by grade
        date_from (date): Deliveries on or after this date
        date_to (date): Deliveries on or before this date
    """

    farmer = serializers.UUIDField(required=False)
    quality = serializers.ChoiceField(choices=QualityGrade.choices, required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)

    def validate(self, attrs):
        """Validate date range."""
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')

        if date_from and date_to:
            if date_from > date_to:
                raise serializers.ValidationError({
                    'date_to': 'End date must be after start date'
                })

        return attrs
