"""
Services package for the contract analyzer.

Contains:
- document_service: text extraction from uploaded PDFs and text files
- payment_service: Stripe Checkout sessions and the paid-session registry
- answer_service: OpenAI integration for answering contract questions
"""

from .answer_service import AnswerService, get_answer_service
from .document_service import DocumentService, get_document_service
from .payment_service import (
    PaidSessionRegistry,
    PaymentService,
    configure_stripe_http_client,
    get_payment_service,
)

__all__ = [
    "AnswerService",
    "DocumentService",
    "PaidSessionRegistry",
    "PaymentService",
    "configure_stripe_http_client",
    "get_answer_service",
    "get_document_service",
    "get_payment_service",
]
