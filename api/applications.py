from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from api.common import drop_fields, ensure_matched, require_fields
from database import DocumentStore, get_store
from schemas.application import ApplicationCreate
from schemas.enums import FeeStatus

router = APIRouter(prefix="/applications", tags=["applications"])

MSG_APPLICATION_NOT_FOUND = "Application not found"
# Written only by the payment verification flow
SERVER_OWNED_FIELDS = ("_id", "feeStatus", "paymentDetails")


@router.get("")
async def list_applications(
    status: Optional[str] = Query(None),
    user_email: Optional[str] = Query(None, alias="userEmail"),
    store: DocumentStore = Depends(get_store),
):
    query: dict[str, Any] = {}
    if status:
        query["status"] = status
    if user_email:
        query["userEmail"] = user_email
    return await store.applications.find(query)


@router.post("")
async def create_application(body: ApplicationCreate, store: DocumentStore = Depends(get_store)):
    application = drop_fields(body.model_dump(by_alias=True), SERVER_OWNED_FIELDS)
    application["feeStatus"] = FeeStatus.UNPAID.value
    inserted_id = await store.applications.insert(application)
    return {"acknowledged": True, "insertedId": inserted_id}


@router.get("/{application_id}")
async def get_application(application_id: str, store: DocumentStore = Depends(get_store)):
    application = await store.applications.find_by_id(application_id)
    if not application:
        raise HTTPException(status_code=404, detail=MSG_APPLICATION_NOT_FOUND)
    return application


@router.patch("/{application_id}")
async def update_application(
    application_id: str,
    updates: dict[str, Any] = Body(...),
    store: DocumentStore = Depends(get_store),
):
    fields = require_fields(drop_fields(updates, SERVER_OWNED_FIELDS))
    outcome = await store.applications.update_by_id(application_id, fields)
    ensure_matched(outcome, MSG_APPLICATION_NOT_FOUND)
    return outcome.to_response()
