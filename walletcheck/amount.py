# walletcheck/amount.py
"""Big-integer helpers for ledger amounts (wei).

Amounts are plain Python ints. Parsing is strict: floats never enter the
picture and anything that is not a clean digit string is rejected.
"""

import string
from enum import Enum

from walletcheck.errors import InvalidAmountError

_HEX_DIGITS = frozenset(string.hexdigits)


class Ordering(Enum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


def parse_decimal(s: str) -> int:
    if not isinstance(s, str):
        raise InvalidAmountError(f"Amount must be a string, got {type(s).__name__}")
    text = s.strip()
    # str.isdigit() also accepts non-ASCII digits such as "²"
    if not text or not text.isascii() or not text.isdigit():
        raise InvalidAmountError(f"Invalid decimal amount: {s!r}")
    return int(text, 10)


def parse_hex(s: str) -> int:
    if not isinstance(s, str):
        raise InvalidAmountError(f"Amount must be a string, got {type(s).__name__}")
    text = s.strip()
    if text[:2] in ("0x", "0X"):
        text = text[2:]
    if not text or not _HEX_DIGITS.issuperset(text):
        raise InvalidAmountError(f"Invalid hex amount: {s!r}")
    return int(text, 16)


def to_decimal_string(amount: int) -> str:
    return str(amount)


def add(a: int, b: int) -> int:
    return a + b


def subtract(a: int, b: int) -> int:
    # May go negative while replaying history
    return a - b


def compare(a: int, b: int) -> Ordering:
    if a < b:
        return Ordering.LESS
    if a > b:
        return Ordering.GREATER
    return Ordering.EQUAL
