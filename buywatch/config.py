import os
import logging
from dataclasses import dataclass
from typing import Optional, Union

from dotenv import load_dotenv

from .errors import ConfigurationError

load_dotenv()

logger = logging.getLogger(__name__)

# Required environment variables
REQUIRED_ENV_VARS = [
    'RPC_URL',
    'BOT_TOKEN',
    'PAIR_ADDRESS',
    'ROUTER_ADDRESS',
    'TOKEN_ADDRESS',
    'BASE_ADDRESS',
    'INTERMEDIATE_ADDRESS',
    'STABLE_ADDRESS',
]

# Polling / retry defaults
POLL_INTERVAL_SECONDS = 5
MAX_RETRIES = 3
RETRY_DELAY_SECONDS = 1.0

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


@dataclass(frozen=True)
class TokenDecimals:
    """Decimal precision of every token the pipeline normalizes."""
    target: int = 18
    base: int = 9
    intermediate: int = 18
    stable: int = 6


@dataclass(frozen=True)
class Settings:
    rpc_url: str
    bot_token: str
    pair_address: str
    router_address: str
    token_address: str
    base_address: str
    intermediate_address: str
    stable_address: str
    chat_id: Optional[Union[int, str]] = None
    decimals: TokenDecimals = TokenDecimals()
    target_symbol: str = "TOKEN"
    base_symbol: str = "BASE"
    poll_interval: float = POLL_INTERVAL_SECONDS
    max_retries: int = MAX_RETRIES
    retry_delay: float = RETRY_DELAY_SECONDS
    dry_run: bool = False

    @classmethod
    def from_env(cls, env=None, dry_run: Optional[bool] = None) -> "Settings":
        """
        Build settings from environment variables.

        In dry run nothing is sent to Telegram, so BOT_TOKEN is optional and
        TELEGRAM_CHAT_ID is required instead of the /start handshake.

        Args:
            env: Mapping to read from (defaults to os.environ)
            dry_run: Overrides DRY_RUN when not None

        Returns:
            Validated Settings instance

        Raises:
            ConfigurationError: if a required variable is missing or malformed
        """
        env = os.environ if env is None else env

        if dry_run is None:
            dry_run = env.get("DRY_RUN", "").lower() in ("1", "true", "yes")

        required = REQUIRED_ENV_VARS
        if dry_run:
            required = [name for name in REQUIRED_ENV_VARS if name != 'BOT_TOKEN'] + ['TELEGRAM_CHAT_ID']

        for name in required:
            if not env.get(name):
                raise ConfigurationError(f"Missing required environment variable: {name}")

        defaults = TokenDecimals()
        decimals = TokenDecimals(
            target=_get_int(env, "TARGET_DECIMALS", defaults.target),
            base=_get_int(env, "BASE_DECIMALS", defaults.base),
            intermediate=_get_int(env, "INTERMEDIATE_DECIMALS", defaults.intermediate),
            stable=_get_int(env, "STABLE_DECIMALS", defaults.stable),
        )

        return cls(
            rpc_url=env["RPC_URL"],
            bot_token=env.get("BOT_TOKEN", ""),
            pair_address=env["PAIR_ADDRESS"],
            router_address=env["ROUTER_ADDRESS"],
            token_address=env["TOKEN_ADDRESS"],
            base_address=env["BASE_ADDRESS"],
            intermediate_address=env["INTERMEDIATE_ADDRESS"],
            stable_address=env["STABLE_ADDRESS"],
            chat_id=_get_chat_id(env),
            decimals=decimals,
            target_symbol=env.get("TARGET_SYMBOL", "TOKEN"),
            base_symbol=env.get("BASE_SYMBOL", "BASE"),
            poll_interval=_get_float(env, "POLL_INTERVAL_SECONDS", POLL_INTERVAL_SECONDS),
            max_retries=_get_int(env, "MAX_RETRIES", MAX_RETRIES),
            retry_delay=_get_float(env, "RETRY_DELAY_SECONDS", RETRY_DELAY_SECONDS),
            dry_run=dry_run,
        )


def _get_chat_id(env) -> Optional[Union[int, str]]:
    """Numeric chat id, or an @channelusername kept as text."""
    value = env.get("TELEGRAM_CHAT_ID")
    if not value:
        return None
    if value.startswith("@") and len(value) > 1:
        return value
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"TELEGRAM_CHAT_ID must be a numeric chat id or @channelusername, got {value!r}")


def _get_int(env, name: str, default: int) -> int:
    value = env.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")


def _get_float(env, name: str, default: float) -> float:
    value = env.get(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {value!r}")


async def check_decimals(client, settings: Settings) -> None:
    """
    Compare the configured decimals against each token's on-chain decimals().

    Raises:
        ConfigurationError: listing every token whose decimals disagree
    """
    expected = {
        settings.token_address: settings.decimals.target,
        settings.base_address: settings.decimals.base,
        settings.intermediate_address: settings.decimals.intermediate,
        settings.stable_address: settings.decimals.stable,
    }

    from .client.retry import with_retry

    mismatches = []
    for address, configured in expected.items():
        actual = await with_retry(
            lambda address=address: client.get_token_decimals(address),
            settings.max_retries,
            settings.retry_delay,
        )
        if actual != configured:
            mismatches.append(f"{address}: configured {configured}, on-chain {actual}")
        else:
            logger.debug(f"Decimals for {address} confirmed: {actual}")

    if mismatches:
        raise ConfigurationError("Token decimals mismatch: " + "; ".join(mismatches))
