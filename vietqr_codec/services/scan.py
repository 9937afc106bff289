"""Scanned payload decoding service."""
from __future__ import annotations

import logging

from ..config import settings
from ..errors import MalformedPayload
from ..models import ParsedPayload
from ..monitoring import record_payload_parsed
from ..vietqr_parser import parse

logger = logging.getLogger("vietqr.services")


def scan_payload(payload: str) -> ParsedPayload:
    """Parse a scanned payload, recording the outcome before re-raising failures."""

    try:
        parsed = parse(payload)
    except MalformedPayload as exc:
        record_payload_parsed("malformed")
        extra: dict[str, object] = {"field": exc.field, "position": exc.position, "reason": exc.message}
        if settings.log_payloads:
            extra["payload"] = payload
        logger.info("payload rejected", extra=extra)
        raise

    record_payload_parsed("ok")
    logger.info(
        "payload parsed",
        extra={"bank_bin": parsed.bank_bin, "known_bank": parsed.bank is not None, "dynamic": parsed.is_dynamic},
    )
    return parsed
