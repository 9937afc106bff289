"""Catalog of NAPAS 247 member banks keyed by their BIN."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .errors import err_invalid_input


@dataclass(frozen=True)
class Bank:
    code: str
    name: str
    bin: str


BANKS: Final[tuple[Bank, ...]] = (
    Bank("acb", "ACB", "970416"),
    Bank("agribank", "Agribank", "970405"),
    Bank("bac_a_bank", "Bac A Bank", "970409"),
    Bank("bao_viet_bank", "Bao Viet Bank", "970438"),
    Bank("bidv", "BIDV", "970418"),
    Bank("dong_a_bank", "Dong A Bank", "970406"),
    Bank("eximbank", "Eximbank", "970431"),
    Bank("gpbank", "GPBank", "970408"),
    Bank("hdbank", "HDBank", "970437"),
    Bank("hong_leong", "Hong Leong Vietnam", "970442"),
    Bank("kienlongbank", "Kienlongbank", "970452"),
    Bank("lpbank", "LPBank (LienVietPostBank)", "970449"),
    Bank("mbbank", "MBBank", "970422"),
    Bank("msb", "MSB", "970426"),
    Bank("nam_a_bank", "Nam A Bank", "970428"),
    Bank("ncb", "NCB", "970419"),
    Bank("ocb", "OCB", "970448"),
    Bank("oceanbank", "Oceanbank", "970414"),
    Bank("pgbank", "PG Bank", "970430"),
    Bank("pvcombank", "PVcomBank", "970412"),
    Bank("sacombank", "Sacombank", "970403"),
    Bank("saigonbank", "Saigonbank", "970400"),
    Bank("scb", "SCB", "970429"),
    Bank("seabank", "SeABank", "970440"),
    Bank("shb", "SHB", "970443"),
    Bank("techcombank", "Techcombank", "970407"),
    Bank("tpbank", "TPBank", "970423"),
    Bank("vib", "VIB", "970441"),
    Bank("viet_capital_bank", "VietCapitalBank (BVBank)", "970454"),
    Bank("vietcombank", "Vietcombank", "970436"),
    Bank("vietinbank", "Vietinbank", "970415"),
    Bank("vpbank", "VPBank", "970432"),
    Bank("vrb", "VRB", "970421"),
)

_BY_BIN: Final[dict[str, Bank]] = {bank.bin: bank for bank in BANKS}
_BY_CODE: Final[dict[str, Bank]] = {bank.code: bank for bank in BANKS}


def lookup_by_bin(bin_code: str) -> Bank | None:
    return _BY_BIN.get(bin_code)


def lookup_name(bin_code: str) -> str | None:
    bank = _BY_BIN.get(bin_code)
    return bank.name if bank else None


def lookup_id(bank: Bank) -> str:
    return bank.bin


def get_bank(code: str) -> Bank:
    """Resolve a catalog code such as ``"techcombank"`` (case-insensitive)."""

    bank = _BY_CODE.get(code.strip().lower())
    if bank is None:
        raise err_invalid_input(f"Unknown bank code: {code}")
    return bank
