"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Expense input is missing, empty, or has a non-positive/non-numeric cost"""

    pass


class NotFoundError(DomainException):
    """No expense (or no qualifying unpaid expense) matches the request"""

    pass


class AlreadyPaidError(DomainException):
    """Single expense is already paid"""

    pass


class ConflictError(DomainException):
    """Paid expense cannot be edited under the current policy"""

    pass


class StoreIOError(DomainException):
    """Record store failed to read or write"""

    pass
