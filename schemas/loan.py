from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class LoanReplace(BaseModel):
    """Editable loan fields; PUT replaces all of them at once."""

    title: str
    description: Optional[str] = None
    interest_rate: float = Field(..., alias="interestRate")
    category: Optional[str] = None
    max_loan: float = Field(..., alias="maxLoan")
    image: Optional[str] = None

    model_config = {"populate_by_name": True}
