from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from api.common import drop_fields, ensure_deleted, ensure_matched, require_fields
from database import DocumentStore, get_store
from schemas.loan import LoanReplace

router = APIRouter(prefix="/loans", tags=["loans"])

MSG_LOAN_NOT_FOUND = "Loan not found"


@router.get("")
async def list_loans(
    limit: int = Query(0, ge=0, description="Maximum number of loans; 0 means no cap"),
    created_by: Optional[str] = Query(None, alias="createdBy"),
    store: DocumentStore = Depends(get_store),
):
    query = {"createdBy": created_by} if created_by else {}
    return await store.loans.find(query, limit=limit)


@router.post("")
async def create_loan(loan: dict[str, Any] = Body(...), store: DocumentStore = Depends(get_store)):
    inserted_id = await store.loans.insert(drop_fields(loan, ("_id",)))
    return {"acknowledged": True, "insertedId": inserted_id}


@router.get("/{loan_id}")
async def get_loan(loan_id: str, store: DocumentStore = Depends(get_store)):
    loan = await store.loans.find_by_id(loan_id)
    if not loan:
        raise HTTPException(status_code=404, detail=MSG_LOAN_NOT_FOUND)
    return loan


@router.put("/{loan_id}")
async def replace_loan(loan_id: str, body: LoanReplace, store: DocumentStore = Depends(get_store)):
    updates = body.model_dump(by_alias=True)
    outcome = await store.loans.update_by_id(loan_id, updates)
    if outcome.matched_count == 0:
        raise HTTPException(status_code=404, detail=MSG_LOAN_NOT_FOUND)
    return {"success": True, "modifiedCount": outcome.modified_count}


@router.patch("/{loan_id}")
async def update_loan(loan_id: str, updates: dict[str, Any] = Body(...), store: DocumentStore = Depends(get_store)):
    fields = require_fields(drop_fields(updates, ("_id",)))
    outcome = await store.loans.update_by_id(loan_id, fields)
    ensure_matched(outcome, MSG_LOAN_NOT_FOUND)
    return outcome.to_response()


@router.delete("/{loan_id}")
async def delete_loan(loan_id: str, store: DocumentStore = Depends(get_store)):
    deleted = await store.loans.delete_by_id(loan_id)
    ensure_deleted(deleted, MSG_LOAN_NOT_FOUND)
    return {"acknowledged": True, "deletedCount": deleted}
