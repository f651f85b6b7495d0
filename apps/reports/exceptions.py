"""
Domain exceptions for the reports app.

Exception Hierarchy:
    ReportsServiceError (base)
    ├── InvalidReportTypeError
    └── MissingParameterError

Usage:
    from apps.reports.exceptions import InvalidReportTypeError

    if report_type not in REPORT_TYPES:
        raise InvalidReportTypeError(f"Invalid report type: {report_type}")
"""


class ReportsServiceError(Exception):
    """
    Base exception for all report errors.

    Views catch this to turn any report problem into a 400:

        try:
            data = generate_report('weekly')
        except ReportsServiceError as e:
            return Response({'error': str(e)}, status=400)
    """

    pass


class InvalidReportTypeError(ReportsServiceError):
    """
    Raised when the requested report type is unknown.

    Valid types are: daily, farmer, monthly, quality, farmer_statement.
    """

    pass


class MissingParameterError(ReportsServiceError):
    """
    Raised when a report needs a parameter that was not given.

    Example:
        raise MissingParameterError("Farmer ID is required for Farmer Statement.")
    """

    pass
