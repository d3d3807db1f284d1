"""
Hosted checkout provider client (Stripe).

Creates checkout sessions for the application fee and reads their payment
status back. Every provider failure surfaces as CheckoutProviderError with the
provider's message; nothing is retried.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import stripe

from config import settings
from exceptions import CheckoutProviderError

logger = logging.getLogger(__name__)


@dataclass
class CheckoutSession:
    id: str
    url: str


@dataclass
class SessionStatus:
    id: str
    payment_status: str
    amount_total: Optional[int]
    currency: Optional[str]
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_paid(self) -> bool:
        return self.payment_status == "paid"


def _plain_dict(obj: Any) -> dict[str, Any]:
    if obj is None:
        return {}
    to_dict = getattr(obj, "to_dict", None)
    return to_dict() if callable(to_dict) else dict(obj)


def _provider_message(e: stripe.StripeError) -> str:
    return getattr(e, "user_message", None) or str(e) or e.__class__.__name__


class CheckoutClient:
    """Thin async wrapper around the Stripe Checkout Sessions API."""

    def __init__(self, api_key: str | None = None, client: stripe.StripeClient | None = None):
        self._client = client or stripe.StripeClient(
            api_key or settings.stripe_secret_key,
            http_client=stripe.HTTPXClient(),
        )

    async def create_session(
        self,
        amount_minor_units: int,
        currency: str,
        product_name: str,
        success_url: str,
        cancel_url: str,
        metadata: dict[str, str],
    ) -> CheckoutSession:
        params = {
            "payment_method_types": ["card"],
            "line_items": [
                {
                    "price_data": {
                        "currency": currency,
                        "product_data": {"name": product_name},
                        "unit_amount": amount_minor_units,
                    },
                    "quantity": 1,
                }
            ],
            "mode": "payment",
            "success_url": success_url,
            "cancel_url": cancel_url,
            "metadata": metadata,
        }
        try:
            session = await self._client.v1.checkout.sessions.create_async(params=params)
        except stripe.StripeError as e:
            logger.warning("Checkout session creation failed", extra={"error": str(e)})
            raise CheckoutProviderError(_provider_message(e)) from e
        return CheckoutSession(id=session.id, url=session.url)

    async def retrieve_session(self, session_id: str) -> SessionStatus:
        try:
            session = await self._client.v1.checkout.sessions.retrieve_async(session_id)
        except stripe.StripeError as e:
            logger.warning(
                "Checkout session lookup failed",
                extra={"session_id": session_id, "error": str(e)},
            )
            raise CheckoutProviderError(_provider_message(e)) from e
        return SessionStatus(
            id=session.id,
            payment_status=session.payment_status,
            amount_total=session.amount_total,
            currency=session.currency,
            metadata=_plain_dict(session.metadata),
        )


_checkout_client: Optional[CheckoutClient] = None


def init_checkout_client() -> CheckoutClient:
    global _checkout_client
    _checkout_client = CheckoutClient()
    return _checkout_client


def get_checkout_client() -> CheckoutClient:
    if _checkout_client is None:
        raise RuntimeError("Checkout client is not initialized")
    return _checkout_client
