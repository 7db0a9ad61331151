"""Domain exceptions for transactions services."""


class TransactionServiceError(Exception):
    """
    Base exception for transactions services.

    ``retryable`` tells callers whether repeating the same call may succeed.
    """

    retryable = False


class ProjectNotFoundError(TransactionServiceError):
    """Project to purchase does not exist."""
    pass


class TransactionNotFoundError(TransactionServiceError):
    """No transaction matches the gateway order id."""
    pass


class NotPurchasableError(TransactionServiceError):
    """Project is free or belongs to the buyer."""
    pass


class AlreadyPurchasedError(TransactionServiceError):
    """Buyer already holds a successful transaction for the project."""
    pass


class InvalidSignatureError(TransactionServiceError):
    """Gateway notification signature does not match."""
    pass


class TransientGatewayError(TransactionServiceError):
    """Payment gateway unreachable, timed out or answered with an error."""

    retryable = True
