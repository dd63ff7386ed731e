"""
Router for Stripe Checkout endpoints.

Handles:
- Creating a one-time payment Checkout session
- Verifying a returned Checkout session and recording it as paid
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from ..exceptions import ValidationError
from ..models import CheckoutSessionResponse, CheckoutStatusResponse, ErrorResponse
from ..services.payment_service import PaymentService, get_payment_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["checkout"])


@router.post(
    "/create-checkout-session",
    response_model=CheckoutSessionResponse,
    responses={500: {"model": ErrorResponse}},
)
async def create_checkout_session(
    payment_service: PaymentService = Depends(get_payment_service),
) -> CheckoutSessionResponse:
    """
    Create a Stripe Checkout session for purchasing access.

    The client redirects the browser to the returned URL. Any request body
    is ignored.
    """
    session = await run_in_threadpool(payment_service.create_checkout_session)
    return CheckoutSessionResponse(url=session["url"], id=session["id"])


@router.get(
    "/checkout-session",
    response_model=CheckoutStatusResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_checkout_session(
    session_id: str | None = None,
    payment_service: PaymentService = Depends(get_payment_service),
) -> CheckoutStatusResponse:
    """
    Retrieve a Checkout session and report whether it is paid.

    Paid sessions are remembered, which unlocks /api/query for them.
    """
    payment_service.require_api_key()

    if not session_id:
        raise ValidationError("session_id query parameter is required.")

    paid = await run_in_threadpool(payment_service.verify_checkout_session, session_id)
    return CheckoutStatusResponse(paid=paid)
