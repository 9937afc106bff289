"""Hand-built payload fragments shared across the codec tests."""
from __future__ import annotations

from vietqr_codec.crc import crc16_ccitt

# Tag 38 for BIN 970407 / account 9602091996.
MERCHANT_TECHCOMBANK = "38540010A00000072701240006970407011096020919960208QRIBFTTA"
STATIC_HEAD = "000201010211"
DYNAMIC_HEAD = "000201010212"
CURRENCY = "5303704"
COUNTRY = "5802VN"


def seal(body: str) -> str:
    """Append a valid Tag 63 record to ``body``."""

    return f"{body}6304{crc16_ccitt(body + '6304')}"
