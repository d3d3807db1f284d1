from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from urllib.parse import urlencode

from config import settings
from database import DocumentStore
from exceptions import InvalidRequestError, NotFoundError
from schemas.enums import FeeStatus
from services.checkout import CheckoutClient, CheckoutSession

logger = logging.getLogger(__name__)

MSG_APPLICATION_NOT_FOUND = "Application not found"
MSG_PAYMENT_NOT_COMPLETED = "Payment not completed"


def _success_url(application_id: str) -> str:
    # Stripe substitutes {CHECKOUT_SESSION_ID} itself, so it must stay unencoded.
    return (
        f"{settings.public_app_origin.rstrip('/')}/payment-success"
        f"?session_id={{CHECKOUT_SESSION_ID}}&{urlencode({'application_id': application_id})}"
    )


def _cancel_url(application_id: str) -> str:
    return f"{settings.public_app_origin.rstrip('/')}/payment-cancel?{urlencode({'application_id': application_id})}"


async def create_payment_session(
    store: DocumentStore,
    checkout: CheckoutClient,
    application_id: str,
) -> CheckoutSession:
    """
    Open a hosted checkout session for the application fee.

    Every call creates a new, independent session; a second call for the same
    application leaves the first session live.
    """
    application = await store.applications.find_by_id(application_id)
    if application is None:
        raise NotFoundError(MSG_APPLICATION_NOT_FOUND)

    session = await checkout.create_session(
        amount_minor_units=settings.application_fee_cents,
        currency=settings.application_fee_currency,
        product_name=settings.application_fee_product_name,
        success_url=_success_url(application_id),
        cancel_url=_cancel_url(application_id),
        metadata={"applicationId": application_id},
    )
    logger.info(
        "Checkout session created",
        extra={"application_id": application_id, "session_id": session.id},
    )
    return session


async def verify_payment(
    store: DocumentStore,
    checkout: CheckoutClient,
    session_id: str,
    application_id: str,
) -> dict[str, Any]:
    """
    Pull the session's status from the provider and, when paid, mark the
    application's fee as paid together with a snapshot of the payment.

    Unpaid sessions cause no write. Re-verifying a paid session re-applies the
    same fields, refreshing paidAt.
    """
    session = await checkout.retrieve_session(session_id)

    referenced = session.metadata.get("applicationId")
    if referenced and referenced != application_id:
        raise InvalidRequestError("Checkout session does not belong to this application")

    if not session.is_paid:
        logger.info(
            "Payment not completed",
            extra={
                "application_id": application_id,
                "session_id": session_id,
                "payment_status": session.payment_status,
            },
        )
        return {
            "success": False,
            "message": MSG_PAYMENT_NOT_COMPLETED,
            "paymentStatus": session.payment_status,
        }

    payment_details = {
        "sessionId": session.id,
        "amount": (session.amount_total or 0) / 100,
        "currency": session.currency,
        "paidAt": datetime.now(timezone.utc),
    }
    outcome = await store.applications.update_by_id(
        application_id,
        {"feeStatus": FeeStatus.PAID.value, "paymentDetails": payment_details},
    )
    if outcome.matched_count == 0:
        raise NotFoundError(MSG_APPLICATION_NOT_FOUND, counters={"matchedCount": 0, "modifiedCount": 0})

    logger.info(
        "Application fee paid",
        extra={
            "application_id": application_id,
            "session_id": session_id,
            "amount": payment_details["amount"],
        },
    )
    return {
        "success": True,
        "result": {"matchedCount": outcome.matched_count, "modifiedCount": outcome.modified_count},
        "paymentDetails": payment_details,
    }
