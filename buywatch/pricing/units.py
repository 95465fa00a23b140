"""
Token Unit Conversion

On-chain amounts are integers scaled by the token's decimals. Amounts of
different tokens may only be combined after conversion with their own decimals.
"""


def to_decimal_units(raw_amount: int, decimals: int) -> float:
    """Convert a raw integer amount to token units, e.g. 1_500_000 @6 -> 1.5"""
    return raw_amount / (10 ** decimals)


def to_raw_units(amount: float, decimals: int) -> int:
    """Convert token units back to the raw integer amount (rounded)."""
    return int(round(amount * (10 ** decimals)))


def one_unit(decimals: int) -> int:
    """Raw amount representing exactly one whole token."""
    return 10 ** decimals
