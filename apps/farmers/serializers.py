from rest_framework import serializers

from .models import Farmer, phone_validator


class FarmerSerializer(serializers.ModelSerializer):
    """Farmer representation with ledger totals."""

    has_login = serializers.SerializerMethodField()

    class Meta:
        model = Farmer
        fields = [
            'id',
            'name',
            'phone',
            'location',
            'join_date',
            'id_number',
            'notes',
            'has_login',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_has_login(self, obj) -> bool:
        return obj.user_id is not None


class FarmerInputSerializer(serializers.Serializer):
    """
    Farmer registration / edit form.

    Uniqueness of the phone number is checked by the service layer so the
    same rule applies to both farmers and login accounts.
    """

    name = serializers.CharField(
        max_length=100,
        min_length=2,
        error_messages={'min_length': 'Name must be at least 2 characters.'},
    )
    phone = serializers.CharField(max_length=16, validators=[phone_validator])
    location = serializers.CharField(
        max_length=200,
        min_length=2,
        error_messages={'min_length': 'Location must be at least 2 characters.'},
    )
    join_date = serializers.DateField(required=False)
    id_number = serializers.CharField(max_length=50, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)


class FarmerFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for farmer listing.

    Query Parameters:
        search (str): Match against name, phone or location
    """

    search = serializers.CharField(required=False, allow_blank=True, max_length=100)
