"""Utility helpers to build and parse EMV-style TLV payloads."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator

from .errors import err_invalid_input, err_malformed

HEADER_SIZE = 4
MAX_VALUE_LENGTH = 99

_LENGTH_RE = re.compile(r"[0-9]{2}")


@dataclass(frozen=True)
class TLVItem:
    tag: str
    value: str

    def serialize(self) -> str:
        if len(self.value) > MAX_VALUE_LENGTH:
            raise err_invalid_input(f"Field {self.tag} value is {len(self.value)} characters, maximum is {MAX_VALUE_LENGTH}")
        length = f"{len(self.value):02d}"
        return f"{self.tag}{length}{self.value}"


def build_tlv(items: Iterable[TLVItem]) -> str:
    """Serialize iterable of TLV items into EMV string."""

    return "".join(item.serialize() for item in items)


def read_record(data: str, cursor: int, *, scope: str = "payload") -> tuple[TLVItem, int]:
    """Read one tag/length/value record at ``cursor``.

    Returns the record and the cursor position just past its value. ``scope``
    names the enclosing field in error messages.
    """

    tag = data[cursor : cursor + 2]
    length_str = data[cursor + 2 : cursor + HEADER_SIZE]
    if not _LENGTH_RE.fullmatch(length_str):
        raise err_malformed(
            f"Invalid length format {length_str!r} for field {tag} in {scope} at position {cursor}",
            field=tag,
            position=cursor,
        )
    value_start = cursor + HEADER_SIZE
    value_end = value_start + int(length_str)
    if value_end > len(data):
        raise err_malformed(
            f"Field {tag} in {scope} declares {length_str} characters but only {len(data) - value_start} remain",
            field=tag,
            position=cursor,
        )
    return TLVItem(tag=tag, value=data[value_start:value_end]), value_end


def parse_tlv(payload: str, *, scope: str = "payload") -> Iterator[TLVItem]:
    """Parse TLV payload string into TLV items."""

    idx = 0
    total = len(payload)
    while idx + HEADER_SIZE <= total:
        item, idx = read_record(payload, idx, scope=scope)
        yield item
    if idx != total:
        raise err_malformed(
            f"Dangling data {payload[idx:]!r} in {scope} at position {idx}",
            position=idx,
        )


def parse_fields(payload: str, *, scope: str = "payload") -> dict[str, str]:
    """Parse TLV payload into a tag -> value map; a repeated tag keeps its last value."""

    return {item.tag: item.value for item in parse_tlv(payload, scope=scope)}
