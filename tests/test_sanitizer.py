import pytest

from vietqr_codec.sanitizer import sanitize


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Thanh toán đơn hàng", "Thanh toan don hang"),
        ("ĐẶNG VĂN ƯỚC", "DANG VAN UOC"),
        ("Cà phê sữa đá", "Ca phe sua da"),
        ("  many   spaces  here ", "many spaces here"),
        ("Order #123 (paid)!", "Order 123 paid"),
        ("", ""),
        ("!!!", ""),
    ],
)
def test_sanitize(text, expected):
    assert sanitize(text) == expected


def test_output_is_ascii_alnum_or_space():
    result = sanitize("Thanh toán đơn hàng café với gia vị đặc biệt ✓ 💸")
    assert result == "Thanh toan don hang cafe voi gia vi dac biet"
    assert all(ch.isascii() and (ch.isalnum() or ch == " ") for ch in result)


def test_idempotent():
    once = sanitize("  Tiền   nhà tháng 10/2026 ")
    assert sanitize(once) == once
