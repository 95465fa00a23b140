"""
Telegram Alerts
===============

Async Telegram Bot API sink for buy alerts.

- send_message: best-effort delivery, failures are logged and reported as False
- wait_for_start: long-polls getUpdates until someone sends /start, which
  establishes the chat that receives alerts
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

import aiohttp

logger = logging.getLogger(__name__)

API_URL = "https://api.telegram.org/bot{token}/{method}"
LONG_POLL_TIMEOUT_SECONDS = 30


@dataclass
class AlertConfig:
    """Configuration for alert sending."""
    bot_token: str
    dry_run: bool = False
    max_message_length: int = 4000
    request_timeout: float = 10


class TelegramNotifier:
    """
    Telegram message sender.

    Owns one aiohttp session, opened lazily and released by close().
    """

    def __init__(self, config: AlertConfig, session: Optional[aiohttp.ClientSession] = None):
        self.config = config
        self._validate()
        self._session = session
        self._update_offset: Optional[int] = None

    def _validate(self):
        if not self.config.dry_run and not self.config.bot_token:
            raise ValueError("BOT_TOKEN is required (or use --dry-run)")

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def _call(self, method: str, payload: Dict[str, Any], timeout: float) -> Any:
        """
        Call a Bot API method.

        Raises:
            aiohttp.ClientError, asyncio.TimeoutError, or RuntimeError when
            Telegram answers with ok=false
        """
        url = API_URL.format(token=self.config.bot_token, method=method)
        async with self._get_session().post(
            url, json=payload, timeout=aiohttp.ClientTimeout(total=timeout)
        ) as response:
            response.raise_for_status()
            data = await response.json(content_type=None)

        if not data.get("ok"):
            raise RuntimeError(f"Telegram {method} rejected: {data.get('description', 'unknown error')}")
        return data.get("result")

    def _truncate_message(self, text: str) -> str:
        """Truncate message to Telegram's character limit."""
        if len(text) > self.config.max_message_length:
            return text[:self.config.max_message_length - 20] + "\n... (truncated)"
        return text

    async def send_message(self, chat_id: Union[int, str], text: str, parse_mode: str = "Markdown") -> bool:
        """
        Send a message to a chat.

        Args:
            chat_id: Recipient chat
            text: Message text in ``parse_mode`` markup
            parse_mode: Telegram parse mode

        Returns:
            True if Telegram accepted the message, False otherwise
        """
        text = self._truncate_message(text)

        if self.config.dry_run:
            logger.info(f"[DRY RUN] Would send Telegram message to {chat_id}:\n{text}")
            return True

        payload = {"chat_id": chat_id, "text": text, "parse_mode": parse_mode}
        try:
            result = await self._call("sendMessage", payload, self.config.request_timeout)
            logger.info(f"Telegram message sent (message_id: {result.get('message_id')})")
            return True
        except asyncio.TimeoutError:
            logger.error("Telegram request timed out")
        except aiohttp.ClientResponseError as e:
            # Status only; the request URL carries the bot token
            logger.error(f"Telegram HTTP error: {e.status}")
        except aiohttp.ClientError:
            logger.error("Telegram connection error - network issue")
        except RuntimeError as e:
            logger.error(str(e))
        return False

    async def get_updates(self, timeout: int = LONG_POLL_TIMEOUT_SECONDS) -> List[Dict]:
        """Fetch pending updates, acknowledging everything already seen."""
        payload: Dict[str, Any] = {"timeout": timeout, "allowed_updates": ["message"]}
        if self._update_offset is not None:
            payload["offset"] = self._update_offset

        updates = await self._call("getUpdates", payload, timeout + self.config.request_timeout)
        if updates:
            self._update_offset = updates[-1]["update_id"] + 1
        return updates

    async def wait_for_start(self, retry_delay: float = 5) -> int:
        """
        Block until a /start command arrives.

        Returns:
            Chat id of the first chat that sent /start

        Raises:
            ValueError: in dry run, where no updates are read
        """
        if self.config.dry_run:
            raise ValueError("TELEGRAM_CHAT_ID is required in dry run")

        logger.info("Waiting for /start command...")
        while True:
            try:
                updates = await self.get_updates()
            except (aiohttp.ClientError, asyncio.TimeoutError, RuntimeError) as e:
                logger.warning(f"getUpdates failed ({type(e).__name__}), retrying in {retry_delay}s")
                await asyncio.sleep(retry_delay)
                continue

            for update in updates:
                message = update.get("message") or {}
                words = (message.get("text") or "").split()
                # "/start", "/start@SomeBot" or "/start <payload>"
                if words and words[0].split("@")[0] == "/start":
                    chat_id = message["chat"]["id"]
                    logger.info(f"Received /start from chat {chat_id}")
                    return chat_id

    async def close(self):
        if self._session is not None and not self._session.closed:
            await self._session.close()
        logger.info("Telegram session closed")
