"""Domain exceptions, rendered into the `{"error": ...}` envelope by the app's handlers."""
from typing import Optional


class LoanLinkError(Exception):
    """Base exception for the backend."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(LoanLinkError):
    """Requested record is absent, or a write matched nothing."""

    status_code = 404

    def __init__(self, message: str, counters: Optional[dict[str, int]] = None):
        super().__init__(message)
        self.counters = counters or {}


class InvalidIdentifierError(LoanLinkError):
    """Identifier does not parse as a store id."""

    status_code = 400


class InvalidRequestError(LoanLinkError):
    status_code = 400


class CheckoutProviderError(LoanLinkError):
    """The payment provider failed or rejected the call."""

    status_code = 502


class AuthenticationError(LoanLinkError):
    status_code = 401


class PermissionDeniedError(LoanLinkError):
    status_code = 403


class AuthenticationUnavailableError(LoanLinkError):
    """No identity credential is configured for this process."""

    status_code = 503
