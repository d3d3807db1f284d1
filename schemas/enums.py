from enum import Enum


class FeeStatus(str, Enum):
    UNPAID = "Unpaid"
    PAID = "Paid"


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class ApplicationStatus(str, Enum):
    """Common values; the field itself accepts any caller-supplied string."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
