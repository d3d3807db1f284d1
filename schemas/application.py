from __future__ import annotations

from pydantic import BaseModel, Field

from schemas.enums import ApplicationStatus


class ApplicationCreate(BaseModel):
    loan_id: str = Field(..., alias="loanId")
    user_email: str = Field(..., alias="userEmail")
    status: str = ApplicationStatus.PENDING.value

    model_config = {"populate_by_name": True, "extra": "allow"}
