"""
Tests for settings loading and decimals consistency
"""

import pytest

from buywatch.config import REQUIRED_ENV_VARS, Settings, TokenDecimals, check_decimals
from buywatch.errors import ConfigurationError
from conftest import BASE, INTERMEDIATE, STABLE, TOKEN


@pytest.fixture
def env():
    values = {name: f"value-{name.lower()}" for name in REQUIRED_ENV_VARS}
    values["RPC_URL"] = "http://localhost:8545"
    return values


def test_defaults(env):
    settings = Settings.from_env(env)

    assert settings.rpc_url == "http://localhost:8545"
    assert settings.chat_id is None
    assert settings.decimals == TokenDecimals(target=18, base=9, intermediate=18, stable=6)
    assert settings.poll_interval == 5
    assert settings.max_retries == 3
    assert settings.retry_delay == 1.0
    assert settings.dry_run is False


def test_overrides(env):
    env.update({
        "TELEGRAM_CHAT_ID": "-1001234",
        "TARGET_DECIMALS": "9",
        "BASE_DECIMALS": "18",
        "TARGET_SYMBOL": "MONEY",
        "POLL_INTERVAL_SECONDS": "2.5",
        "DRY_RUN": "true",
    })

    settings = Settings.from_env(env)

    assert settings.chat_id == -1001234
    assert settings.decimals.target == 9
    assert settings.decimals.base == 18
    assert settings.target_symbol == "MONEY"
    assert settings.poll_interval == 2.5
    assert settings.dry_run is True


@pytest.mark.parametrize("missing", REQUIRED_ENV_VARS)
def test_missing_required_variable(env, missing):
    del env[missing]

    with pytest.raises(ConfigurationError, match=missing):
        Settings.from_env(env)


def test_malformed_number(env):
    env["BASE_DECIMALS"] = "nine"

    with pytest.raises(ConfigurationError, match="BASE_DECIMALS"):
        Settings.from_env(env)


def test_channel_username_is_kept_as_text(env):
    env["TELEGRAM_CHAT_ID"] = "@mychannel"

    assert Settings.from_env(env).chat_id == "@mychannel"


@pytest.mark.parametrize("chat_id", ["my-chat", "12ab", "@"])
def test_malformed_chat_id(env, chat_id):
    env["TELEGRAM_CHAT_ID"] = chat_id

    with pytest.raises(ConfigurationError, match="TELEGRAM_CHAT_ID"):
        Settings.from_env(env)


def test_dry_run_needs_chat_id_instead_of_bot_token(env):
    del env["BOT_TOKEN"]
    env["DRY_RUN"] = "1"

    with pytest.raises(ConfigurationError, match="TELEGRAM_CHAT_ID"):
        Settings.from_env(env)

    env["TELEGRAM_CHAT_ID"] = "42"
    settings = Settings.from_env(env)

    assert settings.dry_run is True
    assert settings.bot_token == ""
    assert settings.chat_id == 42


def test_dry_run_flag_overrides_environment(env):
    del env["BOT_TOKEN"]
    env["TELEGRAM_CHAT_ID"] = "42"

    with pytest.raises(ConfigurationError, match="BOT_TOKEN"):
        Settings.from_env(env)

    assert Settings.from_env(env, dry_run=True).dry_run is True



@pytest.mark.asyncio
async def test_check_decimals_accepts_matching_chain(chain, settings):
    chain.decimals = {TOKEN: 9, BASE: 18, INTERMEDIATE: 18, STABLE: 6}

    await check_decimals(chain, settings)


@pytest.mark.asyncio
async def test_check_decimals_reports_every_mismatch(chain, settings):
    chain.decimals = {TOKEN: 18, BASE: 9, INTERMEDIATE: 18, STABLE: 6}

    with pytest.raises(ConfigurationError) as exc_info:
        await check_decimals(chain, settings)

    message = str(exc_info.value)
    assert f"{TOKEN}: configured 9, on-chain 18" in message
    assert f"{BASE}: configured 18, on-chain 9" in message
    assert INTERMEDIATE not in message
