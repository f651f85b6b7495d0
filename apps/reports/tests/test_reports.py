from datetime import date
from decimal import Decimal

import pytest

from apps.farmers.services import FarmerNotFoundError
from apps.reports.exceptions import InvalidReportTypeError, MissingParameterError
from apps.reports.exporters import report_to_csv, csv_filename
from apps.reports.reports import generate_report, quality_score, dashboard_stats

MAY_START = date(2024, 5, 1)
MAY_END = date(2024, 5, 31)


class TestQualityScore:
    """Tests for the weighted quality score."""

    def test_all_grade_a(self):
        assert quality_score({'A': 10, 'B': 0, 'C': 0}) == Decimal('100')

    def test_half_a_half_b(self):
        assert quality_score({'A': 10, 'B': 10, 'C': 0}) == Decimal('95')

    def test_no_milk(self):
        assert quality_score({'A': 0, 'B': 0, 'C': 0}) == Decimal('0')

    def test_missing_grades_count_as_zero(self):
        assert quality_score({'C': Decimal('2.5')}) == Decimal('80')


@pytest.mark.django_db
class TestReports:
    """Tests for generate_report."""

    def test_daily(self, deliveries):
        data = generate_report('daily', start_date=MAY_START, end_date=MAY_END)

        assert data['total_deliveries'] == 3
        assert data['total_liters'] == Decimal('25.00')
        assert data['total_value'] == Decimal('10000') + Decimal('9000') + Decimal('4000')
        assert data['average_per_delivery'] == Decimal('8.33')
        assert [d['date'] for d in data['deliveries']] == [MAY_START, date(2024, 5, 2), date(2024, 5, 2)]

    def test_daily_empty(self, milk_price):
        data = generate_report('daily')

        assert data['total_deliveries'] == 0
        assert data['average_per_delivery'] == Decimal('0')
        assert data['deliveries'] == []

    def test_farmer(self, deliveries, farmer, other_farmer):
        data = generate_report('farmer', start_date=MAY_START, end_date=MAY_END)

        assert data['farmers'] == [
            {
                'farmer_id': other_farmer.id,
                'farmer_name': 'Grace Nakato',
                'deliveries_count': 1,
                'total_liters': Decimal('5.00'),
                'amount_due': Decimal('4000.00'),
            },
            {
                'farmer_id': farmer.id,
                'farmer_name': 'John Mukasa',
                'deliveries_count': 2,
                'total_liters': Decimal('20.00'),
                'amount_due': Decimal('19000.00'),
            },
        ]

    def test_summed_values_have_two_decimal_places(self, deliveries):
        """Database sums come back with two places however the backend returns them."""
        farmer_row = generate_report('farmer', start_date=MAY_START, end_date=MAY_END)['farmers'][0]
        monthly = generate_report('monthly', start_date=MAY_START, end_date=MAY_END)
        daily = generate_report('daily', start_date=MAY_START, end_date=MAY_END)

        assert str(farmer_row['total_liters']) == '5.00'
        assert str(farmer_row['amount_due']) == '4000.00'
        assert str(monthly['grade_c_liters']) == '5.00'
        assert str(daily['total_value']) == '23000.00'

    def test_farmer_omits_farmers_without_deliveries(self, deliveries):
        data = generate_report('farmer', start_date=date(2024, 6, 1))

        assert [f['farmer_name'] for f in data['farmers']] == ['Grace Nakato']

    def test_monthly(self, deliveries):
        data = generate_report('monthly', start_date=MAY_START, end_date=MAY_END)

        assert data['total_deliveries'] == 3
        assert data['grade_a_count'] == 1
        assert data['grade_b_count'] == 1
        assert data['grade_c_count'] == 1
        assert data['grade_a_liters'] == Decimal('10.00')
        assert data['grade_c_liters'] == Decimal('5.00')

    def test_quality(self, deliveries):
        data = generate_report('quality', start_date=MAY_START, end_date=MAY_END)

        assert data['total_liters'] == Decimal('25.00')
        assert data['grade_a_percentage'] == Decimal('40.00')
        assert data['grade_b_percentage'] == Decimal('40.00')
        assert data['grade_c_percentage'] == Decimal('20.00')
        # (10*100 + 10*90 + 5*80) / 25
        assert data['quality_score'] == Decimal('92.00')

    def test_quality_without_deliveries(self, milk_price):
        data = generate_report('quality')

        assert data['total_liters'] == Decimal('0')
        assert data['grade_a_percentage'] == Decimal('0')
        assert data['quality_score'] == Decimal('0')

    def test_farmer_statement(self, deliveries, farmer):
        data = generate_report('farmer_statement', farmer_id=farmer.id)

        assert data['farmer']['name'] == 'John Mukasa'
        assert len(data['deliveries']) == 2
        assert data['total_liters'] == Decimal('20.00')
        assert data['total_amount'] == Decimal('19000.00')

    def test_farmer_statement_requires_farmer(self, milk_price):
        with pytest.raises(MissingParameterError):
            generate_report('farmer_statement')

    def test_farmer_statement_unknown_farmer(self, milk_price):
        with pytest.raises(FarmerNotFoundError):
            generate_report('farmer_statement', farmer_id='00000000-0000-0000-0000-000000000000')

    def test_unknown_type(self):
        with pytest.raises(InvalidReportTypeError):
            generate_report('weekly')


@pytest.mark.django_db
class TestDashboardStats:
    """Tests for dashboard_stats."""

    def test_staff_view(self, operator_user, deliveries):
        data = dashboard_stats(operator_user)

        assert data['total_farmers'] == 2
        assert data['pending_payments_count'] == 3
        assert 'farmer_name' not in data
        assert len(data['recent_deliveries']) == 4
        assert data['recent_deliveries'][0]['date'] == date(2024, 6, 1)

    def test_farmer_view(self, farmer, deliveries):
        data = dashboard_stats(farmer.user)

        assert data['farmer_name'] == 'John Mukasa'
        assert data['farmer_id_snippet'] == str(farmer.id)[:8] + '...'
        assert data['pending_payments_count'] == 1
        assert 'total_farmers' not in data
        assert {d['farmer_id'] for d in data['recent_deliveries']} == {farmer.id}


@pytest.mark.django_db
class TestCsvExport:
    """Tests for report_to_csv."""

    @pytest.mark.parametrize('report_type,header', [
        ('daily', 'Date,Time,Farmer,Quantity (L),Quality,Amount (UGX)'),
        ('farmer', 'Farmer Name,Deliveries,Total Liters (L),Amount Due (UGX)'),
        ('monthly', 'Metric,Value'),
        ('quality', 'Grade,Liters,Percentage'),
    ])
    def test_headers(self, deliveries, report_type, header):
        content = report_to_csv(report_type, generate_report(report_type, MAY_START, MAY_END))

        assert content.splitlines()[0] == header

    def test_statement_rows(self, deliveries, farmer):
        data = generate_report('farmer_statement', farmer_id=farmer.id)
        lines = report_to_csv('farmer_statement', data).splitlines()

        assert lines[0] == 'Date,Time,Quantity (L),Quality,Amount (UGX)'
        assert lines[1] == '2024-05-01,07:00,10.00,A,10000.00'
        assert len(lines) == 3

    def test_empty_report_has_header_only(self, milk_price):
        content = report_to_csv('daily', generate_report('daily'))

        assert content.splitlines() == ['Date,Time,Farmer,Quantity (L),Quality,Amount (UGX)']

    def test_filename(self):
        assert csv_filename('daily', MAY_START, MAY_END) == 'daily_report_2024-05-01_2024-05-31.csv'
        assert csv_filename('quality') == 'quality_report.csv'
