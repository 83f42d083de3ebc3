"""Amount coercion for decoded balances."""

from typing import Any


def to_int(value: Any) -> int:
    """Decoded balance → int. Accepts ints and decimal or 0x-hex strings; rejects bools and floats."""
    if isinstance(value, bool):
        raise TypeError(f"Not an amount: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.startswith(("0x", "0X")):
            return int(text, 16)
        if text.isdigit():
            return int(text)
    raise TypeError(f"Not an amount: {value!r}")
