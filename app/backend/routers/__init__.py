"""
Routers package for FastAPI endpoints.

Organized by domain:
- checkout: Stripe Checkout session creation and verification
- query: Contract upload and question answering
"""

from . import checkout, query

__all__ = ["checkout", "query"]
