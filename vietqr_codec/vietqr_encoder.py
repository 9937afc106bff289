"""VietQR payload encoder following the NAPAS 247 field layout."""
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Iterable

from .banks import Bank, lookup_id
from .crc import crc16_ccitt
from .errors import err_invalid_input
from .models import EncodedPayload, TransferDescriptor
from .sanitizer import sanitize
from .tlv import MAX_VALUE_LENGTH, TLVItem, build_tlv

TAG_PAYLOAD_FORMAT = "00"
TAG_INITIATION_METHOD = "01"
TAG_MERCHANT_ACCOUNT = "38"
TAG_CURRENCY = "53"
TAG_AMOUNT = "54"
TAG_COUNTRY_CODE = "58"
TAG_ADDITIONAL_DATA = "62"
TAG_CRC = "63"

SUB_TAG_GUID = "00"
SUB_TAG_BENEFICIARY = "01"
SUB_TAG_SERVICE = "02"
SUB_TAG_BENEFICIARY_BIN = "00"
SUB_TAG_BENEFICIARY_ACCOUNT = "01"
SUB_TAG_PURPOSE = "08"

PAYLOAD_FORMAT = "01"
INITIATION_STATIC = "11"
INITIATION_DYNAMIC = "12"
NAPAS_GUID = "A000000727"
SERVICE_CODE = "QRIBFTTA"
CURRENCY_VND = "704"
COUNTRY_VN = "VN"

CRC_HEADER = f"{TAG_CRC}04"

_BIN_RE = re.compile(r"[0-9]{6}")


def _validate(descriptor: TransferDescriptor) -> int | None:
    if not descriptor.account_number:
        raise err_invalid_input("Account number cannot be empty")

    whole: int | None = None
    if descriptor.amount is not None:
        try:
            amount = Decimal(descriptor.amount)
        except (InvalidOperation, TypeError, ValueError) as exc:
            raise err_invalid_input(f"Amount is not a number: {descriptor.amount!r}") from exc
        if not amount.is_finite():
            raise err_invalid_input(f"Amount must be finite: {descriptor.amount!r}")
        if amount < 0:
            raise err_invalid_input("Amount must be greater than or equal to 0")
        if amount.adjusted() >= MAX_VALUE_LENGTH:
            raise err_invalid_input(f"Amount has more than {MAX_VALUE_LENGTH} integer digits")
        whole = int(amount)

    if descriptor.bank is None and descriptor.bank_bin is None:
        raise err_invalid_input("Either bank or bank_bin must be provided")
    if descriptor.bank is not None and descriptor.bank_bin is not None:
        raise err_invalid_input("Cannot provide both bank and bank_bin")
    if descriptor.bank_bin is not None and not _BIN_RE.fullmatch(descriptor.bank_bin):
        raise err_invalid_input(f"Bank BIN must be exactly 6 digits: {descriptor.bank_bin!r}")

    return whole


def _merchant_account(bank_bin: str, account_number: str) -> TLVItem:
    beneficiary = build_tlv(
        [
            TLVItem(tag=SUB_TAG_BENEFICIARY_BIN, value=bank_bin),
            TLVItem(tag=SUB_TAG_BENEFICIARY_ACCOUNT, value=account_number),
        ]
    )
    value = build_tlv(
        [
            TLVItem(tag=SUB_TAG_GUID, value=NAPAS_GUID),
            TLVItem(tag=SUB_TAG_BENEFICIARY, value=beneficiary),
            TLVItem(tag=SUB_TAG_SERVICE, value=SERVICE_CODE),
        ]
    )
    return TLVItem(tag=TAG_MERCHANT_ACCOUNT, value=value)


def _fields(descriptor: TransferDescriptor, amount: int | None) -> Iterable[TLVItem]:
    bank_bin = lookup_id(descriptor.bank) if descriptor.bank else descriptor.bank_bin
    initiation = INITIATION_DYNAMIC if descriptor.is_dynamic else INITIATION_STATIC

    yield TLVItem(tag=TAG_PAYLOAD_FORMAT, value=PAYLOAD_FORMAT)
    yield TLVItem(tag=TAG_INITIATION_METHOD, value=initiation)
    yield _merchant_account(bank_bin, descriptor.account_number)
    yield TLVItem(tag=TAG_CURRENCY, value=CURRENCY_VND)
    # VND has no minor unit; fractions are dropped and zero means "not specified".
    if amount:
        yield TLVItem(tag=TAG_AMOUNT, value=str(amount))
    yield TLVItem(tag=TAG_COUNTRY_CODE, value=COUNTRY_VN)
    if descriptor.message:
        purpose = sanitize(descriptor.message)
        if purpose:
            yield TLVItem(tag=TAG_ADDITIONAL_DATA, value=TLVItem(tag=SUB_TAG_PURPOSE, value=purpose).serialize())


def encode(descriptor: TransferDescriptor) -> EncodedPayload:
    """Render ``descriptor`` and seal it with the Tag 63 CRC."""

    amount = _validate(descriptor)
    payload_no_crc = build_tlv(_fields(descriptor, amount))
    crc_input = f"{payload_no_crc}{CRC_HEADER}"
    crc = crc16_ccitt(crc_input)
    return EncodedPayload(payload=f"{crc_input}{crc}", crc=crc)


def build(descriptor: TransferDescriptor) -> str:
    return encode(descriptor).payload


def generate(
    *,
    account_number: str,
    bank: Bank | None = None,
    bank_bin: str | None = None,
    amount: int | float | Decimal | None = None,
    message: str | None = None,
) -> str:
    """Build a payload from keyword arguments.

    >>> generate(bank_bin="970407", account_number="9602091996")[:14]
    '00020101021138'
    """

    return build(
        TransferDescriptor(
            account_number=account_number,
            bank=bank,
            bank_bin=bank_bin,
            amount=amount,
            message=message,
        )
    )
