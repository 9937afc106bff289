"""Payload generation service."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from ..banks import get_bank
from ..config import settings
from ..models import EncodedPayload, TransferDescriptor
from ..monitoring import record_payload_built
from ..vietqr_encoder import encode

logger = logging.getLogger("vietqr.services")


@dataclass(slots=True)
class GenerateResult:
    descriptor: TransferDescriptor
    encoded: EncodedPayload


def generate_payload(
    *,
    account_number: str,
    bank_code: str | None = None,
    bank_bin: str | None = None,
    amount: Decimal | None = None,
    message: str | None = None,
) -> GenerateResult:
    descriptor = TransferDescriptor(
        account_number=account_number,
        bank=get_bank(bank_code) if bank_code is not None else None,
        bank_bin=bank_bin,
        amount=amount,
        message=message,
    )
    encoded = encode(descriptor)

    kind = "dynamic" if descriptor.is_dynamic else "static"
    record_payload_built(kind)
    extra: dict[str, object] = {"kind": kind, "crc": encoded.crc}
    if settings.log_payloads:
        extra["payload"] = encoded.payload
    logger.info("payload built", extra=extra)

    return GenerateResult(descriptor=descriptor, encoded=encoded)
