"""Shared fakes for the buy bot tests."""

import pytest

from buywatch.config import Settings, TokenDecimals

PAIR = "0x1111111111111111111111111111111111111111"
ROUTER = "0x2222222222222222222222222222222222222222"
TOKEN = "0x3333333333333333333333333333333333333333"
BASE = "0xAbCdEf0000000000000000000000000000000004"
INTERMEDIATE = "0x5555555555555555555555555555555555555555"
STABLE = "0x6666666666666666666666666666666666666666"
BUYER = "0x7777777777777777777777777777777777777777"


class FakeChainClient:
    """In-memory stand-in for Web3Client; failures are queued per method."""

    def __init__(self):
        self.block_number = 100
        self.logs_by_range = {}
        self.reserves = (0, 0)
        self.tokens = (TOKEN, BASE)
        self.quotes = {}
        self.decimals = {}
        self.total_supply = 0
        self.failures = {}
        self.calls = []

    def _maybe_fail(self, method):
        self.calls.append(method)
        pending = self.failures.get(method)
        if pending:
            raise pending.pop(0)

    async def get_block_number(self):
        self._maybe_fail("get_block_number")
        return self.block_number

    async def get_swap_logs(self, pool_address, from_block, to_block):
        self._maybe_fail("get_swap_logs")
        self.calls.append(("range", from_block, to_block))
        return list(self.logs_by_range.get((from_block, to_block), []))

    async def get_reserves(self, pool_address):
        self._maybe_fail("get_reserves")
        return self.reserves

    async def get_pair_tokens(self, pool_address):
        self._maybe_fail("get_pair_tokens")
        return self.tokens

    async def get_amounts_out(self, router_address, amount_in, path):
        self._maybe_fail("get_amounts_out")
        return self.quotes.get((path[0], path[1]))

    async def get_token_decimals(self, token_address):
        self._maybe_fail("get_token_decimals")
        return self.decimals[token_address]

    async def get_total_supply(self, token_address):
        self._maybe_fail("get_total_supply")
        return self.total_supply


class FakeNotifier:
    def __init__(self, succeed=True):
        self.succeed = succeed
        self.sent = []

    async def send_message(self, chat_id, text, parse_mode="Markdown"):
        self.sent.append((chat_id, text))
        return self.succeed

    async def close(self):
        pass


class PassThroughDecoder:
    """Treats each 'log' as an already decoded swap dict."""

    def decode_swap_log(self, log):
        if log.get("undecodable"):
            return None
        return log


@pytest.fixture
def decimals():
    return TokenDecimals(target=9, base=18, intermediate=18, stable=6)


@pytest.fixture
def settings(decimals):
    return Settings(
        rpc_url="http://localhost:8545",
        bot_token="123:abc",
        pair_address=PAIR,
        router_address=ROUTER,
        token_address=TOKEN,
        base_address=BASE,
        intermediate_address=INTERMEDIATE,
        stable_address=STABLE,
        chat_id=42,
        decimals=decimals,
        target_symbol="MONEY",
        base_symbol="BESC",
        poll_interval=0,
        max_retries=3,
        retry_delay=0,
    )


@pytest.fixture
def chain():
    return FakeChainClient()


@pytest.fixture
def notifier():
    return FakeNotifier()
