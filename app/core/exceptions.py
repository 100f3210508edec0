class ExpenseTrackerError(Exception):
    """Base class for domain errors that map onto an HTTP status."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidExpenseData(ExpenseTrackerError):
    """Group expenses that cannot be aggregated without breaking conservation."""


class CSVParseError(ExpenseTrackerError):
    pass
