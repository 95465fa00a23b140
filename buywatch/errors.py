"""
Error Types

Failures raised inside the buy-alert pipeline. Data invariant violations are
soft failures: the oracle and the stats aggregator turn them into ``None``.
"""


class BuyWatchError(Exception):
    """Base class for all buywatch errors."""


class ConfigurationError(BuyWatchError, ValueError):
    """Required configuration is missing or inconsistent with the chain."""


class RetryExhausted(BuyWatchError):
    """An RPC operation kept failing after the last allowed attempt."""


class DataInvariantViolation(BuyWatchError):
    """On-chain data cannot be used to derive a price."""


class InvalidQuoteResponse(DataInvariantViolation):
    pass


class ZeroReserve(DataInvariantViolation):
    pass


class OraclePriceUnavailable(DataInvariantViolation):
    pass
