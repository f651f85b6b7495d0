"""
Reports Module
==============

Read-only queries that summarise the deliveries table for display and
CSV export, plus the dashboard counters.

Classes:
    ReportQueries: Static methods, one per report type.

Functions:
    quality_score: Weighted grade score on a 0-100 scale.
    generate_report: Dispatch by report type name.
    dashboard_stats: Today's counters for the current user.

Example:
    Quality analysis for May::

        from apps.reports.reports import generate_report

        data = generate_report(
            'quality',
            start_date=date(2024, 5, 1),
            end_date=date(2024, 5, 31),
        )
        print(f"Quality score: {data['quality_score']}")

Note:
    Everything is recomputed per call. All methods return plain
    dictionaries suitable for JSON responses.
"""

from decimal import Decimal, ROUND_HALF_UP

from django.db.models import Count, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from apps.deliveries.models import Delivery, QualityGrade
from apps.farmers.models import Farmer
from apps.farmers.services import get_farmer
from apps.payments.models import Payment, PaymentStatus

from .exceptions import InvalidReportTypeError, MissingParameterError

DAILY_DELIVERY_LIMIT = 100
RECENT_DELIVERY_LIMIT = 5
GRADE_SCORES = {
    'A': Decimal('100'),
    'B': Decimal('90'),
    'C': Decimal('80'),
}
ZERO = Decimal('0.00')
TWO_PLACES = Decimal('0.01')


def _round(value) -> Decimal:
    return Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def quality_score(liters_by_grade: dict) -> Decimal:
    """
    Weighted quality score: (A*100 + B*90 + C*80) / total liters.

    Args:
        liters_by_grade (dict): Liters keyed by grade ('A', 'B', 'C').
            Missing grades count as zero.

    Returns:
        Decimal: Score rounded to two places, 0 when there are no liters.

    Example:
        >>> quality_score({'A': 10, 'B': 10, 'C': 0})
        Decimal('95.00')
    """
    liters = {grade: Decimal(str(liters_by_grade.get(grade, 0))) for grade in GRADE_SCORES}
    total = sum(liters.values(), Decimal('0'))
    if total == 0:
        return ZERO
    weighted = sum((liters[grade] * score for grade, score in GRADE_SCORES.items()), Decimal('0'))
    return _round(weighted / total)


def _deliveries(start_date=None, end_date=None, farmer_id=None):
    queryset = Delivery.objects.select_related('farmer').order_by('date', 'time', 'created_at')
    if farmer_id:
        queryset = queryset.filter(farmer_id=farmer_id)
    if start_date:
        queryset = queryset.filter(date__gte=start_date)
    if end_date:
        queryset = queryset.filter(date__lte=end_date)
    return queryset


def _delivery_row(delivery: Delivery) -> dict:
    return {
        'id': delivery.id,
        'farmer_id': delivery.farmer_id,
        'farmer_name': delivery.farmer.name,
        'date': delivery.date,
        'time': delivery.time.strftime('%H:%M'),
        'quantity': delivery.quantity,
        'quality': delivery.quality,
        'amount': delivery.amount,
        'notes': delivery.notes,
    }


def _grade_breakdown(queryset) -> dict:
    """Count and liters per grade, every grade present."""
    rows = {
        row['quality']: row
        for row in queryset.order_by().values('quality').annotate(
            count=Count('id'),
            liters=Sum('quantity'),
        )
    }
    breakdown = {}
    for grade in QualityGrade.values:
        row = rows.get(grade)
        breakdown[grade] = {
            'count': row['count'] if row else 0,
            'liters': _round(row['liters']) if row else ZERO,
        }
    return breakdown


class ReportQueries:
    """
    Report builders over deliveries in an optional date range.

    Methods:
        daily: Collection totals and the deliveries themselves.
        farmer: Per-farmer totals, farmers with no deliveries omitted.
        monthly: Delivery count and count/liters per grade.
        quality: Liters per grade, percentages and quality score.
        farmer_statement: One farmer's deliveries and totals.
    """

    @staticmethod
    def daily(start_date=None, end_date=None):
        """
        Daily collection report.

        Returns:
            dict: total_deliveries, total_liters, total_value,
            average_per_delivery and up to 100 deliveries.
        """
        queryset = _deliveries(start_date, end_date)
        totals = queryset.aggregate(
            count=Count('id'),
            liters=Coalesce(Sum('quantity'), ZERO),
            value=Coalesce(Sum('amount'), ZERO),
        )
        count = totals['count']
        average = _round(totals['liters'] / count) if count else ZERO

        return {
            'total_deliveries': count,
            'total_liters': _round(totals['liters']),
            'total_value': _round(totals['value']),
            'average_per_delivery': average,
            'deliveries': [_delivery_row(d) for d in queryset[:DAILY_DELIVERY_LIMIT]],
        }

    @staticmethod
    def farmer(start_date=None, end_date=None):
        """Per-farmer deliveries count, liters and amount due, by farmer name."""
        rows = (
            _deliveries(start_date, end_date)
            .order_by()
            .values('farmer_id', 'farmer__name')
            .annotate(
                deliveries_count=Count('id'),
                total_liters=Sum('quantity'),
                amount_due=Sum('amount'),
            )
            .order_by('farmer__name')
        )
        return {
            'farmers': [
                {
                    'farmer_id': row['farmer_id'],
                    'farmer_name': row['farmer__name'],
                    'deliveries_count': row['deliveries_count'],
                    'total_liters': _round(row['total_liters']),
                    'amount_due': _round(row['amount_due']),
                }
                for row in rows
            ],
        }

    @staticmethod
    def monthly(start_date=None, end_date=None):
        """Period summary: delivery count plus count and liters per grade."""
        queryset = _deliveries(start_date, end_date)
        breakdown = _grade_breakdown(queryset)

        data = {'total_deliveries': queryset.count()}
        for grade, values in breakdown.items():
            key = grade.lower()
            data[f'grade_{key}_count'] = values['count']
            data[f'grade_{key}_liters'] = values['liters']
        return data

    @staticmethod
    def quality(start_date=None, end_date=None):
        """
        Quality analysis.

        Returns:
            dict: grade_{a,b,c}_liters, total_liters,
            grade_{a,b,c}_percentage and quality_score. Percentages and
            score are 0 when no milk was delivered.
        """
        breakdown = _grade_breakdown(_deliveries(start_date, end_date))
        liters = {grade: values['liters'] for grade, values in breakdown.items()}
        total = sum(liters.values(), ZERO)

        data = {}
        for grade, value in liters.items():
            data[f'grade_{grade.lower()}_liters'] = value
        data['total_liters'] = total
        for grade, value in liters.items():
            data[f'grade_{grade.lower()}_percentage'] = _round(value * 100 / total) if total else ZERO
        data['quality_score'] = quality_score(liters)
        return data

    @staticmethod
    def farmer_statement(start_date=None, end_date=None, farmer_id=None):
        """
        Statement for one farmer.

        Raises:
            MissingParameterError: If no farmer_id is given
            FarmerNotFoundError: If the farmer does not exist
        """
        if not farmer_id:
            raise MissingParameterError("Farmer ID is required for Farmer Statement.")

        farmer = get_farmer(farmer_id)
        queryset = _deliveries(start_date, end_date, farmer_id=farmer.id)
        totals = queryset.aggregate(
            liters=Coalesce(Sum('quantity'), ZERO),
            amount=Coalesce(Sum('amount'), ZERO),
        )

        return {
            'farmer': {
                'id': farmer.id,
                'name': farmer.name,
                'phone': farmer.phone,
                'location': farmer.location,
            },
            'deliveries': [_delivery_row(d) for d in queryset],
            'total_liters': _round(totals['liters']),
            'total_amount': _round(totals['amount']),
            'start_date': start_date,
            'end_date': end_date,
        }


REPORT_TYPES = {
    'daily': ReportQueries.daily,
    'farmer': ReportQueries.farmer,
    'monthly': ReportQueries.monthly,
    'quality': ReportQueries.quality,
    'farmer_statement': ReportQueries.farmer_statement,
}


def generate_report(report_type, start_date=None, end_date=None, farmer_id=None):
    """
    Build a report by type name.

    Raises:
        InvalidReportTypeError: If report_type is unknown
        MissingParameterError: farmer_statement without farmer_id
        FarmerNotFoundError: farmer_statement for a missing farmer
    """
    builder = REPORT_TYPES.get(report_type)
    if builder is None:
        raise InvalidReportTypeError(
            f"Invalid report type: {report_type!r}. "
            f"Valid options: {', '.join(REPORT_TYPES)}"
        )
    if report_type == 'farmer_statement':
        return builder(start_date, end_date, farmer_id=farmer_id)
    return builder(start_date, end_date)


def dashboard_stats(user):
    """
    Today's counters for the dashboard.

    Staff see totals across all farmers; a farmer sees only their own
    deliveries and payments, plus their name and a short id.
    """
    today = timezone.localdate()
    deliveries = Delivery.objects.select_related('farmer')
    payments = Payment.objects.filter(status=PaymentStatus.PENDING)
    data = {}

    if user.is_farmer:
        farmer = Farmer.objects.filter(user=user).first()
        deliveries = deliveries.filter(farmer=farmer) if farmer else deliveries.none()
        payments = payments.filter(farmer=farmer) if farmer else payments.none()
        data['farmer_name'] = farmer.name if farmer else None
        data['farmer_id_snippet'] = f"{farmer.id_snippet}..." if farmer else None
    else:
        data['total_farmers'] = Farmer.objects.count()

    todays = deliveries.filter(date=today).aggregate(
        count=Count('id'),
        liters=Coalesce(Sum('quantity'), ZERO),
    )
    data['todays_deliveries_count'] = todays['count']
    data['todays_liters'] = _round(todays['liters'])
    data['pending_payments_count'] = payments.count()
    data['recent_deliveries'] = [
        _delivery_row(d) for d in deliveries.order_by('-date', '-time', '-created_at')[:RECENT_DELIVERY_LIMIT]
    ]
    return data
