"""
CSV rendering of report data.

Each report type has a fixed header row; the rows come from the dict
returned by the matching ReportQueries method.
"""
import pandas as pd

from apps.deliveries.models import QualityGrade

from .exceptions import InvalidReportTypeError

CSV_COLUMNS = {
    'daily': ['Date', 'Time', 'Farmer', 'Quantity (L)', 'Quality', 'Amount (UGX)'],
    'farmer': ['Farmer Name', 'Deliveries', 'Total Liters (L)', 'Amount Due (UGX)'],
    'monthly': ['Metric', 'Value'],
    'quality': ['Grade', 'Liters', 'Percentage'],
    'farmer_statement': ['Date', 'Time', 'Quantity (L)', 'Quality', 'Amount (UGX)'],
}


def _daily_rows(data):
    return [
        [d['date'].isoformat(), d['time'], d['farmer_name'], d['quantity'], d['quality'], d['amount']]
        for d in data['deliveries']
    ]


def _farmer_rows(data):
    return [
        [f['farmer_name'], f['deliveries_count'], f['total_liters'], f['amount_due']]
        for f in data['farmers']
    ]


def _monthly_rows(data):
    rows = [['Total Deliveries', data['total_deliveries']]]
    for grade in QualityGrade.values:
        key = grade.lower()
        rows.append([f'Grade {grade} Deliveries', data[f'grade_{key}_count']])
        rows.append([f'Grade {grade} Liters', data[f'grade_{key}_liters']])
    return rows


def _quality_rows(data):
    rows = [
        [grade, data[f'grade_{grade.lower()}_liters'], data[f'grade_{grade.lower()}_percentage']]
        for grade in QualityGrade.values
    ]
    rows.append(['Total', data['total_liters'], ''])
    rows.append(['Quality Score', '', data['quality_score']])
    return rows


def _statement_rows(data):
    return [
        [d['date'].isoformat(), d['time'], d['quantity'], d['quality'], d['amount']]
        for d in data['deliveries']
    ]


ROW_BUILDERS = {
    'daily': _daily_rows,
    'farmer': _farmer_rows,
    'monthly': _monthly_rows,
    'quality': _quality_rows,
    'farmer_statement': _statement_rows,
}


def report_to_csv(report_type: str, data: dict) -> str:
    """
    Render report data as CSV text with the report's header row.

    Raises:
        InvalidReportTypeError: If report_type has no CSV layout
    """
    if report_type not in ROW_BUILDERS:
        raise InvalidReportTypeError(f"Invalid report type: {report_type!r}")

    df = pd.DataFrame(ROW_BUILDERS[report_type](data), columns=CSV_COLUMNS[report_type])
    return df.to_csv(index=False)


def csv_filename(report_type: str, start_date=None, end_date=None) -> str:
    parts = [report_type, 'report']
    if start_date:
        parts.append(start_date.isoformat())
    if end_date:
        parts.append(end_date.isoformat())
    return '_'.join(parts) + '.csv'
