"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested record does not exist or is not owned by the caller."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class InvalidCredentialsError(DomainError):
    """Login attempted with an unknown email or a wrong password."""


class AuthError(DomainError):
    """Missing, malformed or expired authentication token."""


class ServerError(DomainError):
    """Persistence unreachable or another unexpected fault."""


NO_TOKEN = "No token, authorization denied"
INVALID_TOKEN = "Token is not valid"
INVALID_CREDENTIALS = "Invalid credentials"
USER_ALREADY_EXISTS = "User already exists"
TRANSACTION_NOT_FOUND = "Transaction not found"
NOTHING_TO_EXPORT = "No transactions found to export"


def import_row_failed(category: object, amount: object) -> str:
    """Return message for a CSV import row that could not be stored."""
    return f"Failed to import: {category} - {amount}"


def invalid_transaction_type(value: object) -> str:
    """Return message for a transaction type outside income/expense."""
    return f"Invalid transaction type '{value}': expected 'income' or 'expense'"


def negative_amount(field: str, value: object) -> str:
    """Return message for a negative monetary amount."""
    return f"{field} must not be negative (got {value})"


def missing_field(field: str) -> str:
    """Return message for a required field that is absent or empty."""
    return f"Missing required field: {field}"


def month_out_of_range(month: int) -> str:
    """Return message for a budget month outside 1..12."""
    return f"Month must be between 1 and 12 (got {month})"


def sub_cent_amount(field: str, value: object) -> str:
    """Return message for an amount with more than two decimal places."""
    return f"{field} must have at most two decimal places (got {value})"
