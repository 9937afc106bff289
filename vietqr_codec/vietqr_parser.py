"""VietQR payload parser.

The payload is walked with the generic TLV reader at four levels: the top
level, Tag 38 (merchant account), its beneficiary block, and Tag 62
(additional data). Unknown tags are kept in the intermediate maps and
ignored; a repeated tag keeps its last value.
"""
from __future__ import annotations

import re
from decimal import Decimal

from .banks import lookup_by_bin
from .crc import crc16_ccitt
from .errors import err_malformed
from .models import ParsedPayload
from .tlv import parse_fields, parse_tlv
from .vietqr_encoder import (
    COUNTRY_VN,
    CRC_HEADER,
    CURRENCY_VND,
    INITIATION_DYNAMIC,
    INITIATION_STATIC,
    PAYLOAD_FORMAT,
    SUB_TAG_BENEFICIARY,
    SUB_TAG_BENEFICIARY_ACCOUNT,
    SUB_TAG_BENEFICIARY_BIN,
    SUB_TAG_PURPOSE,
    TAG_ADDITIONAL_DATA,
    TAG_AMOUNT,
    TAG_COUNTRY_CODE,
    TAG_CRC,
    TAG_CURRENCY,
    TAG_INITIATION_METHOD,
    TAG_MERCHANT_ACCOUNT,
    TAG_PAYLOAD_FORMAT,
)

CRC_FIELD_SIZE = len(CRC_HEADER) + 4

_AMOUNT_RE = re.compile(r"[0-9]+(\.[0-9]+)?")


def validate_crc(payload: str) -> str:
    """Check the trailing Tag 63 record and return its checksum."""

    if len(payload) < CRC_FIELD_SIZE:
        raise err_malformed("Payload too short to contain valid CRC", field=TAG_CRC)

    crc_field = payload[-CRC_FIELD_SIZE:]
    position = len(payload) - CRC_FIELD_SIZE
    if crc_field[:2] != TAG_CRC:
        raise err_malformed(f"Invalid CRC field ID: {crc_field[:2]}", field=TAG_CRC, position=position)
    if crc_field[2:4] != "04":
        raise err_malformed(f"Invalid CRC length: {crc_field[2:4]}", field=TAG_CRC, position=position)

    provided = crc_field[4:]
    expected = crc16_ccitt(payload[:-4])
    if provided != expected:
        raise err_malformed(
            f"CRC checksum mismatch. Expected: {expected}, Got: {provided}",
            field=TAG_CRC,
            position=len(payload) - 4,
        )
    return provided


def _require(fields: dict[str, str], tag: str, allowed: tuple[str, ...], label: str) -> str:
    value = fields.get(tag, "")
    if value not in allowed:
        raise err_malformed(f"Invalid {label}: {value!r}", field=tag)
    return value


def _parse_merchant_account(value: str) -> tuple[str, str]:
    if not value:
        raise err_malformed("Merchant account information is empty", field=TAG_MERCHANT_ACCOUNT)

    sub_fields = parse_fields(value, scope=f"field {TAG_MERCHANT_ACCOUNT}")
    beneficiary = parse_fields(sub_fields.get(SUB_TAG_BENEFICIARY, ""), scope="beneficiary block")
    bank_bin = beneficiary.get(SUB_TAG_BENEFICIARY_BIN)
    account_number = beneficiary.get(SUB_TAG_BENEFICIARY_ACCOUNT)
    if not bank_bin or not account_number:
        raise err_malformed(
            "Could not extract bank BIN or account number from merchant account info",
            field=TAG_MERCHANT_ACCOUNT,
        )
    return bank_bin, account_number


def _parse_message(value: str | None) -> str | None:
    if not value:
        return None
    sub_fields = parse_fields(value, scope=f"field {TAG_ADDITIONAL_DATA}")
    return sub_fields.get(SUB_TAG_PURPOSE) or None


def _parse_amount(value: str | None) -> Decimal | None:
    if not value:
        return None
    if not _AMOUNT_RE.fullmatch(value):
        raise err_malformed(f"Invalid amount format: {value}", field=TAG_AMOUNT)
    return Decimal(value)


def parse(payload: str) -> ParsedPayload:
    """Decode a VietQR payload string.

    Raises :class:`~vietqr_codec.errors.MalformedPayload` on any structural or
    semantic violation; no partial result is ever returned.
    """

    if not payload:
        raise err_malformed("Payload cannot be empty")

    crc = validate_crc(payload)

    items = list(parse_tlv(payload))
    if items[-1].tag != TAG_CRC or items[-1].value != crc:
        raise err_malformed("CRC field must be the last record of the payload", field=TAG_CRC)
    fields = {item.tag: item.value for item in items}

    payload_format = _require(fields, TAG_PAYLOAD_FORMAT, (PAYLOAD_FORMAT,), "payload format")
    initiation = _require(
        fields, TAG_INITIATION_METHOD, (INITIATION_STATIC, INITIATION_DYNAMIC), "point of initiation"
    )
    currency = _require(fields, TAG_CURRENCY, (CURRENCY_VND,), "currency code")
    country_code = _require(fields, TAG_COUNTRY_CODE, (COUNTRY_VN,), "country code")

    bank_bin, account_number = _parse_merchant_account(fields.get(TAG_MERCHANT_ACCOUNT, ""))
    message = _parse_message(fields.get(TAG_ADDITIONAL_DATA))
    amount = _parse_amount(fields.get(TAG_AMOUNT))

    return ParsedPayload(
        bank=lookup_by_bin(bank_bin),
        bank_bin=bank_bin,
        account_number=account_number,
        amount=amount,
        message=message,
        is_dynamic=initiation == INITIATION_DYNAMIC,
        payload_format=payload_format,
        point_of_initiation=initiation,
        currency=currency,
        country_code=country_code,
        crc=crc,
    )
