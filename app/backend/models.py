"""
Pydantic models for the contract analyzer API.

Defines the response bodies returned by each endpoint.
"""

from pydantic import BaseModel, Field


class QueryResponse(BaseModel):
    """Answer to a question about an uploaded contract."""

    answer: str = Field(..., description="Model answer, trimmed")


class CheckoutSessionResponse(BaseModel):
    """A newly created Stripe Checkout session."""

    url: str = Field(..., description="Hosted checkout page to redirect to")
    id: str = Field(..., description="Checkout session ID")


class CheckoutStatusResponse(BaseModel):
    """Payment status of a Checkout session."""

    paid: bool = Field(..., description="Whether the session is paid in full")


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""

    error: str = Field(..., description="Client-facing error message")
    details: str | None = Field(
        default=None,
        description="Provider message, when safe to expose",
    )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status")
    message: str = Field(..., description="Status message")
    version: str = Field(default="1.0.0", description="API version")
