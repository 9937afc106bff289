"""Pydantic schemas for API contracts."""
from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class BankResponse(BaseModel):
    code: str
    name: str
    bin: str


class BuildPayloadRequest(BaseModel):
    account_number: str = Field(description="Beneficiary account number")
    bank: str | None = Field(default=None, description="Catalog bank code, e.g. techcombank")
    bank_bin: str | None = Field(default=None, description="Explicit 6-digit BIN for banks outside the catalog")
    amount: Decimal | None = Field(default=None, description="Amount in VND; fractions are truncated")
    message: str | None = Field(default=None, description="Purpose of transaction")


class BuildPayloadResponse(BaseModel):
    payload: str
    crc: str
    is_dynamic: bool


class ParsePayloadRequest(BaseModel):
    payload: str


class ParsePayloadResponse(BaseModel):
    bank: BankResponse | None
    bank_name: str
    bank_bin: str
    account_number: str
    amount: Decimal | None
    formatted_amount: str
    message: str | None
    is_dynamic: bool
    payload_format: str
    point_of_initiation: str
    currency: str
    country_code: str
    crc: str
