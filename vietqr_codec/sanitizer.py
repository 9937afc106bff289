"""Vietnamese text normalization for free-text payload fields."""
from __future__ import annotations

import re

_DIACRITICS: dict[str, str] = {
    "a": "áàảãạăắằẳẵặâấầẩẫậ",
    "e": "éèẻẽẹêếềểễệ",
    "i": "íìỉĩị",
    "o": "óòỏõọôốồổỗộơớờởỡợ",
    "u": "úùủũụưứừửữự",
    "y": "ýỳỷỹỵ",
    "d": "đ",
}

_TRANSLATION = str.maketrans(
    {accented: base for base, chars in _DIACRITICS.items() for accented in chars}
    | {accented.upper(): base.upper() for base, chars in _DIACRITICS.items() for accented in chars}
)

_DISALLOWED_RE = re.compile(r"[^a-zA-Z0-9 ]")
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize(text: str) -> str:
    """Strip Vietnamese accents and anything outside ``[A-Za-z0-9 ]``.

    >>> sanitize("Thanh toán đơn hàng")
    'Thanh toan don hang'
    """

    result = text.translate(_TRANSLATION)
    result = _DISALLOWED_RE.sub("", result)
    return _WHITESPACE_RE.sub(" ", result.strip())
