"""
Firebase credential subsystem.

The service account arrives base64-encoded in FIREBASE_SERVICE_ACCOUNT_KEY
(see scripts/keyconvert.py). When present it backs ID-token verification for
the admin-only endpoints; when absent those endpoints answer 503.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import firebase_admin
from fastapi import Depends, Request
from firebase_admin import auth, credentials
from starlette.concurrency import run_in_threadpool

from config import settings
from database import DocumentStore, get_store
from exceptions import AuthenticationError, AuthenticationUnavailableError, PermissionDeniedError
from schemas.enums import UserRole
from utils.credentials import decode_service_account

logger = logging.getLogger(__name__)

_app: Optional[firebase_admin.App] = None


def init_firebase() -> Optional[firebase_admin.App]:
    global _app
    if _app is not None:
        return _app
    if not settings.firebase_enabled:
        logger.info("Firebase credential not configured; admin endpoints disabled")
        return None
    service_account = decode_service_account(settings.firebase_service_account_key)
    _app = firebase_admin.initialize_app(credentials.Certificate(service_account))
    logger.info("Firebase admin initialized", extra={"project_id": service_account.get("project_id")})
    return _app


async def verify_id_token(token: str) -> dict[str, Any]:
    if _app is None:
        raise AuthenticationUnavailableError("Authentication is not configured")
    try:
        # firebase_admin is synchronous (signing keys, revocation check)
        return await run_in_threadpool(auth.verify_id_token, token, _app, True)
    except auth.CertificateFetchError as e:
        logger.warning("Could not fetch token signing keys", extra={"error": str(e)})
        raise AuthenticationUnavailableError("Token verification is temporarily unavailable") from e
    except auth.UserDisabledError as e:
        raise AuthenticationError("User account is disabled") from e
    except (ValueError, auth.InvalidIdTokenError, auth.ExpiredIdTokenError, auth.RevokedIdTokenError) as e:
        raise AuthenticationError("Invalid authentication token") from e


def _bearer_token(request: Request) -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Missing bearer token")
    return token.strip()


async def get_current_claims(request: Request) -> dict[str, Any]:
    token = _bearer_token(request)
    return await verify_id_token(token)


async def require_admin(
    claims: dict[str, Any] = Depends(get_current_claims),
    store: DocumentStore = Depends(get_store),
) -> dict[str, Any]:
    """Resolve the caller's profile and require the admin role."""
    email = claims.get("email")
    if not email:
        raise PermissionDeniedError("Token carries no email")
    user = await store.users.find_one({"email": email})
    if not user or user.get("role") != UserRole.ADMIN.value:
        raise PermissionDeniedError("Admin role required")
    return user
