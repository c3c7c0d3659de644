"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ExpenseServiceError(DomainException):
    """Expense service rejected the draft or is unavailable"""

    pass


class NoTransactionsFoundError(DomainException):
    """Pasted text contained no recognizable transaction"""

    pass


class InvalidSelectionError(DomainException):
    """Selected candidate index does not exist in the parsed batch"""

    pass
