"""Value objects exchanged by the VietQR encoder and parser."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any

from .banks import Bank


@dataclass(frozen=True)
class TransferDescriptor:
    """Inputs for a bank-transfer payload.

    Exactly one of ``bank`` and ``bank_bin`` identifies the beneficiary bank.
    """

    account_number: str
    bank: Bank | None = None
    bank_bin: str | None = None
    amount: int | float | Decimal | None = None
    message: str | None = None

    @property
    def is_dynamic(self) -> bool:
        return (self.amount is not None and self.amount > 0) or bool(self.message)


@dataclass(frozen=True)
class EncodedPayload:
    payload: str
    crc: str


@dataclass(frozen=True)
class ParsedPayload:
    bank: Bank | None
    bank_bin: str
    account_number: str
    amount: Decimal | None
    message: str | None
    is_dynamic: bool
    payload_format: str
    point_of_initiation: str
    currency: str
    country_code: str
    crc: str

    @property
    def bank_name(self) -> str:
        return self.bank.name if self.bank else f"Unknown Bank ({self.bank_bin})"

    @property
    def formatted_amount(self) -> str:
        if self.amount is None:
            return "Not specified"
        return f"{int(self.amount):,} VND"

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["bank"] = self.bank.name if self.bank else None
        return data

    def __str__(self) -> str:
        lines = [
            "VietQR Parsed Data:",
            f"  Bank: {self.bank_name}",
            f"  Account: {self.account_number}",
            f"  Amount: {self.formatted_amount}",
            f"  Message: {self.message or 'Not specified'}",
            f"  Type: {'Dynamic' if self.is_dynamic else 'Static'} QR",
            f"  Currency: {self.currency}",
            f"  Country: {self.country_code}",
        ]
        return "\n".join(lines)
