from __future__ import annotations

from pydantic import BaseModel, Field


class PaymentSessionCreate(BaseModel):
    application_id: str = Field(..., alias="applicationId")

    model_config = {"populate_by_name": True}


class PaymentSessionResponse(BaseModel):
    session_id: str = Field(..., alias="sessionId")
    url: str

    model_config = {"populate_by_name": True}


class PaymentVerify(BaseModel):
    session_id: str = Field(..., alias="sessionId")
    application_id: str = Field(..., alias="applicationId")

    model_config = {"populate_by_name": True}
