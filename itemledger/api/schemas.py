"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class InvokeRequest(BaseModel):
    """Body of ``POST /api/v1/invoke``."""

    function: str = Field(min_length=1, max_length=64)
    args: list[str] = Field(default_factory=list, max_length=64)


class InvokeResponse(BaseModel):
    """Successful invocation envelope.

    ``payload`` is the contract payload decoded as UTF-8 text, so stored
    records reach the caller byte-for-byte as they were written.
    """

    status: int
    message: str = ""
    payload: str | None = None


class HealthResponse(BaseModel):
    status: str
    ccid: str
    version: str


class ErrorResponse(BaseModel):
    """Error envelope shared by every failing endpoint."""

    error: str
    detail: str
