"""API request/response schemas (Pydantic models)."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response."""

    code: str
    message: str


class RegisterRequest(BaseModel):
    """Register a lightning address."""

    domain: str = Field(..., min_length=1, description="One of the served domains")
    username: str = Field(..., min_length=1, description="Local part to claim")
    lnurl: str = Field(..., min_length=1, description="LNURL or user@domain to forward to")


class RegisterResponse(BaseModel):
    """Returned once on registration; the token cannot be retrieved later."""

    lnaddr: str
    authentication_token: str


class RemoveRequest(BaseModel):
    """Remove a lightning address."""

    domain: str
    username: str
    authentication_token: str = Field(..., min_length=1)


class DestinationResponse(BaseModel):
    """Stored destination of a lightning address."""

    destination: str = Field(..., description="LNURL or user@domain, as registered")
    url: str = Field(..., description="Endpoint the manifest is fetched from")
