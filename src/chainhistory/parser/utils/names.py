"""Name and address normalization for decoder output."""

from eth_utils import is_hex_address, is_same_address


def camel_case(name: str) -> str:
    """transfer_keep_alive → transferKeepAlive. Already-camelCase names pass through."""
    head, *rest = name.split("_")
    return head[:1].lower() + head[1:] + "".join(part[:1].upper() + part[1:] for part in rest)


def pascal_case(name: str) -> str:
    """transaction_fee_paid → TransactionFeePaid. Event names are PascalCase on chain."""
    name = camel_case(name)
    return name[:1].upper() + name[1:]


def same_account(a: str | None, b: str | None) -> bool:
    """Account equality; H160 accounts compare case-insensitively (checksum vs lowercase hex)."""
    if a is None or b is None:
        return False
    if is_hex_address(a) and is_hex_address(b):
        return is_same_address(a, b)
    return a == b
