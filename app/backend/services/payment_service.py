"""
Stripe Checkout integration and the paid-session registry.

Checkout sessions are created and verified against Stripe. Sessions
confirmed as paid are remembered for the lifetime of the process so that
queries never call Stripe again.
"""

import logging
from typing import Any

import stripe

from ..config import Settings, get_settings
from ..exceptions import ConfigurationError, ProviderError

logger = logging.getLogger(__name__)

PRODUCT_NAME = "Contract Analyzer Access"
PAID_STATUS = "paid"


class PaidSessionRegistry:
    """
    In-memory record of Checkout session IDs confirmed as paid.

    Entries are never removed. An absent ID means "not confirmed here",
    not "unpaid".
    """

    def __init__(self):
        self._paid: dict[str, bool] = {}

    def record_paid(self, session_id: str) -> None:
        self._paid[session_id] = True

    def is_paid(self, session_id: str) -> bool:
        return self._paid.get(session_id, False)

    def __len__(self) -> int:
        return len(self._paid)


class PaymentService:
    """
    Service for one-time Stripe Checkout payments.

    Uses the module-level Stripe API with a per-call API key rather than
    setting the global ``stripe.api_key``.
    """

    def __init__(
        self,
        api_key: str | None = None,
        price_id: str | None = None,
        amount: int = 1000,
        currency: str = "usd",
        domain: str = "http://localhost:5001",
        registry: PaidSessionRegistry | None = None,
    ):
        """
        Initialize the payment service.

        Args:
            api_key: Stripe secret key. Checkout calls fail without it.
            price_id: Pre-created Stripe price. Takes precedence over amount/currency.
            amount: Inline price in the smallest currency unit.
            currency: Inline price currency code.
            domain: Public base URL used to build the redirect URLs.
            registry: Paid-session registry; a fresh one is created if omitted.
        """
        self.api_key = api_key
        self.price_id = price_id
        self.amount = amount
        self.currency = currency
        self.domain = domain.rstrip("/")
        self.registry = registry if registry is not None else PaidSessionRegistry()

    @classmethod
    def from_settings(cls, settings: Settings) -> "PaymentService":
        return cls(
            api_key=settings.stripe_secret_key,
            price_id=settings.configured_price_id,
            amount=settings.stripe_amount,
            currency=settings.stripe_currency,
            domain=settings.public_domain,
        )

    @property
    def success_url(self) -> str:
        # Stripe substitutes the session ID for the placeholder
        return f"{self.domain}/?session_id={{CHECKOUT_SESSION_ID}}"

    @property
    def cancel_url(self) -> str:
        return f"{self.domain}/?canceled=true"

    def build_line_items(self) -> list[dict[str, Any]]:
        """Build the single Checkout line item, preferring the configured price ID."""
        if self.price_id:
            return [{"price": self.price_id, "quantity": 1}]
        return [
            {
                "price_data": {
                    "currency": self.currency,
                    "product_data": {"name": PRODUCT_NAME},
                    "unit_amount": self.amount,
                },
                "quantity": 1,
            }
        ]

    def require_api_key(self) -> str:
        if not self.api_key:
            logger.error("Stripe secret key not configured. Set STRIPE_SECRET_KEY.")
            raise ConfigurationError("Stripe is not configured on the server.")
        return self.api_key

    def create_checkout_session(self) -> dict[str, str]:
        """
        Create a one-time payment Checkout session.

        Returns:
            Dict with the hosted checkout ``url`` and the session ``id``.

        Raises:
            ConfigurationError: If no Stripe key is configured.
            ProviderError: If Stripe rejects the request.
        """
        api_key = self.require_api_key()

        try:
            session = stripe.checkout.Session.create(
                api_key=api_key,
                payment_method_types=["card"],
                line_items=self.build_line_items(),
                mode="payment",
                success_url=self.success_url,
                cancel_url=self.cancel_url,
            )
        except stripe.StripeError as e:
            logger.exception("Error creating checkout session")
            raise ProviderError(
                "Unable to create checkout session.",
                details=e.user_message or str(e) or "Unknown error",
            ) from e

        logger.info("Created checkout session %s", session.id)
        return {"url": session.url, "id": session.id}

    def verify_checkout_session(self, session_id: str) -> bool:
        """
        Check with Stripe whether a Checkout session has been paid.

        A paid session is recorded in the registry.

        Raises:
            ConfigurationError: If no Stripe key is configured.
            ProviderError: If the session is unknown or Stripe fails.
        """
        api_key = self.require_api_key()

        try:
            session = stripe.checkout.Session.retrieve(session_id, api_key=api_key)
        except stripe.StripeError as e:
            logger.exception("Error retrieving checkout session %s", session_id)
            raise ProviderError("Unable to retrieve checkout session.") from e

        is_paid = session.payment_status == PAID_STATUS
        if is_paid:
            self.registry.record_paid(session_id)
        logger.info("Checkout session %s paid=%s", session_id, is_paid)
        return is_paid

    def is_session_paid(self, session_id: str) -> bool:
        """Registry lookup only; Stripe is not contacted."""
        return self.registry.is_paid(session_id)


# Singleton instance for convenience
_payment_service: PaymentService | None = None


def get_payment_service() -> PaymentService:
    """Get or create the payment service singleton."""
    global _payment_service
    if _payment_service is None:
        _payment_service = PaymentService.from_settings(get_settings())
    return _payment_service


def configure_stripe_http_client(timeout: float) -> None:
    """
    Install the HTTP client used for every Stripe call.

    Requests give up after ``timeout`` seconds and are never retried.
    """
    stripe.default_http_client = stripe.RequestsClient(timeout=timeout)
    stripe.max_network_retries = 0
    logger.info("Stripe HTTP client configured (timeout=%ss)", timeout)
