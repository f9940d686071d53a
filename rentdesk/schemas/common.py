"""Common schema module."""

from __future__ import annotations

from pydantic import BaseModel


class APIEnvelope(BaseModel):
    status: str = "ok"
    message: str | None = None


class ErrorDetail(BaseModel):
    error_code: str
    message: str


class PropertyDetails(BaseModel):
    locality: str
    address: str
    rent: float
