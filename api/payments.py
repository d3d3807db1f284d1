from fastapi import APIRouter, Depends

from database import DocumentStore, get_store
from schemas.payment import PaymentSessionCreate, PaymentSessionResponse, PaymentVerify
from services.checkout import CheckoutClient, get_checkout_client
from services.payments import create_payment_session, verify_payment

router = APIRouter(tags=["payments"])


@router.post("/create-payment-session", response_model=PaymentSessionResponse)
async def start_checkout(
    body: PaymentSessionCreate,
    store: DocumentStore = Depends(get_store),
    checkout: CheckoutClient = Depends(get_checkout_client),
):
    session = await create_payment_session(store, checkout, body.application_id)
    return PaymentSessionResponse(sessionId=session.id, url=session.url)


@router.post("/verify-payment", response_model=dict)
async def confirm_payment(
    body: PaymentVerify,
    store: DocumentStore = Depends(get_store),
    checkout: CheckoutClient = Depends(get_checkout_client),
):
    return await verify_payment(store, checkout, body.session_id, body.application_id)
