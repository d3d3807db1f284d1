from schemas.application import ApplicationCreate
from schemas.enums import ApplicationStatus, FeeStatus, UserRole
from schemas.loan import LoanReplace
from schemas.payment import PaymentSessionCreate, PaymentSessionResponse, PaymentVerify
from schemas.user import UserCreate

__all__ = [
    "ApplicationCreate",
    "ApplicationStatus",
    "FeeStatus",
    "LoanReplace",
    "PaymentSessionCreate",
    "PaymentSessionResponse",
    "PaymentVerify",
    "UserCreate",
    "UserRole",
]
