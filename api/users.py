import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from api.common import drop_fields, ensure_matched, require_fields
from database import DocumentStore, get_store
from schemas.enums import UserRole
from schemas.user import UserCreate
from services.identity import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

MSG_USER_NOT_FOUND = "User not found"
# Role changes go through set-admin only; email is the lookup key.
PROTECTED_FIELDS = ("_id", "email", "role")


@router.post("")
async def create_user(body: UserCreate, store: DocumentStore = Depends(get_store)):
    """Register a profile on first sign-in; an existing email is left untouched."""
    user = drop_fields(body.model_dump(), ("_id", "role"))
    user["role"] = UserRole.USER.value
    inserted_id = await store.users.insert_if_absent({"email": body.email}, user)
    if inserted_id is None:
        return {"acknowledged": True, "insertedId": None, "existing": True}
    return {"acknowledged": True, "insertedId": inserted_id}


@router.get("")
async def list_users(store: DocumentStore = Depends(get_store)):
    return await store.users.find()


@router.patch("/set-admin/{email}")
async def set_admin(
    email: str,
    store: DocumentStore = Depends(get_store),
    admin: dict[str, Any] = Depends(require_admin),
):
    outcome = await store.users.update_one(
        {"email": email},
        {"role": UserRole.ADMIN.value},
        upsert=True,
    )
    logger.info("Admin role granted", extra={"email": email, "granted_by": admin.get("email")})
    return outcome.to_response()


@router.get("/{email}")
async def get_user(email: str, store: DocumentStore = Depends(get_store)):
    user = await store.users.find_one({"email": email})
    if not user:
        raise HTTPException(status_code=404, detail=MSG_USER_NOT_FOUND)
    return user


@router.patch("/{email}")
async def update_user(email: str, updates: dict[str, Any] = Body(...), store: DocumentStore = Depends(get_store)):
    fields = require_fields(drop_fields(updates, PROTECTED_FIELDS))
    outcome = await store.users.update_one({"email": email}, fields)
    ensure_matched(outcome, MSG_USER_NOT_FOUND)
    return outcome.to_response()
