"""
Serializers for the reports app.

Input Serializers:
    ReportQuerySerializer - Validates date range and farmer parameters

Response Serializers:
    DailyReportSerializer, FarmerReportSerializer, MonthlyReportSerializer,
    QualityReportSerializer, FarmerStatementSerializer - Report bodies
    DashboardResponseSerializer - Dashboard counters
"""

from rest_framework import serializers


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class ReportQuerySerializer(serializers.Serializer):
    """
    Validate report query parameters.

    Query Parameters:
        start_date (date): Start of date range (inclusive)
        end_date (date): End of date range (inclusive)
        farmer (UUID): Farmer for the farmer_statement report
    """

    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    farmer = serializers.UUIDField(required=False)

    def validate(self, attrs):
        start = attrs.get('start_date')
        end = attrs.get('end_date')
        if start and end and start > end:
            raise serializers.ValidationError({
                'end_date': 'End date must be on or after start date.'
            })
        return attrs


# =============================================================================
# Response Serializers (API Documentation)
# =============================================================================

class ReportDeliverySerializer(serializers.Serializer):
    id = serializers.UUIDField()
    farmer_id = serializers.UUIDField()
    farmer_name = serializers.CharField()
    date = serializers.DateField()
    time = serializers.CharField()
    quantity = serializers.DecimalField(max_digits=10, decimal_places=2)
    quality = serializers.CharField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    notes = serializers.CharField()


class DailyReportSerializer(serializers.Serializer):
    total_deliveries = serializers.IntegerField()
    total_liters = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_value = serializers.DecimalField(max_digits=16, decimal_places=2)
    average_per_delivery = serializers.DecimalField(max_digits=12, decimal_places=2)
    deliveries = ReportDeliverySerializer(many=True)


class FarmerReportRowSerializer(serializers.Serializer):
    farmer_id = serializers.UUIDField()
    farmer_name = serializers.CharField()
    deliveries_count = serializers.IntegerField()
    total_liters = serializers.DecimalField(max_digits=14, decimal_places=2)
    amount_due = serializers.DecimalField(max_digits=16, decimal_places=2)


class FarmerReportSerializer(serializers.Serializer):
    farmers = FarmerReportRowSerializer(many=True)


class MonthlyReportSerializer(serializers.Serializer):
    total_deliveries = serializers.IntegerField()
    grade_a_count = serializers.IntegerField()
    grade_a_liters = serializers.DecimalField(max_digits=14, decimal_places=2)
    grade_b_count = serializers.IntegerField()
    grade_b_liters = serializers.DecimalField(max_digits=14, decimal_places=2)
    grade_c_count = serializers.IntegerField()
    grade_c_liters = serializers.DecimalField(max_digits=14, decimal_places=2)


class QualityReportSerializer(serializers.Serializer):
    grade_a_liters = serializers.DecimalField(max_digits=14, decimal_places=2)
    grade_b_liters = serializers.DecimalField(max_digits=14, decimal_places=2)
    grade_c_liters = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_liters = serializers.DecimalField(max_digits=14, decimal_places=2)
    grade_a_percentage = serializers.DecimalField(max_digits=5, decimal_places=2)
    grade_b_percentage = serializers.DecimalField(max_digits=5, decimal_places=2)
    grade_c_percentage = serializers.DecimalField(max_digits=5, decimal_places=2)
    quality_score = serializers.DecimalField(max_digits=5, decimal_places=2)


class StatementFarmerSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    phone = serializers.CharField()
    location = serializers.CharField()


class FarmerStatementSerializer(serializers.Serializer):
    farmer = StatementFarmerSerializer()
    deliveries = ReportDeliverySerializer(many=True)
    total_liters = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_amount = serializers.DecimalField(max_digits=16, decimal_places=2)
    start_date = serializers.DateField(allow_null=True)
    end_date = serializers.DateField(allow_null=True)


class DashboardResponseSerializer(serializers.Serializer):
    """Dashboard counters. total_farmers for staff, farmer_* for farmers."""
    total_farmers = serializers.IntegerField(required=False)
    farmer_name = serializers.CharField(required=False, allow_null=True)
    farmer_id_snippet = serializers.CharField(required=False, allow_null=True)
    todays_deliveries_count = serializers.IntegerField()
    todays_liters = serializers.DecimalField(max_digits=14, decimal_places=2)
    pending_payments_count = serializers.IntegerField()
    recent_deliveries = ReportDeliverySerializer(many=True)


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
