import aiohttp
import asyncio
import logging
from typing import List, Optional
from monitor.config import Config
from monitor.models.snapshot import Alert, MarketSnapshot

logger = logging.getLogger(__name__)

class TelegramAlert:
    API_URL = "https://api.telegram.org"

    @staticmethod
    def format_alerts(snapshot: MarketSnapshot, alerts: List[Alert]) -> str:
        token = snapshot.base_token
        lines = "\n".join(f"⚠️ {alert}" for alert in alerts)
        return (
            f"<b>{token.name}</b> ({token.symbol}) on {snapshot.chain_id}\n"
            f"<code>{token.address}</code>\n\n"
            f"{lines}\n\n"
            f"💵 Price: ${snapshot.price_usd} | 💧 Liq: ${snapshot.liquidity.usd:,.0f}"
        )

    @staticmethod
    async def send_alerts(snapshot: MarketSnapshot, alerts: List[Alert]) -> Optional[int]:
        """
        Sends the alerts for one snapshot as a single message. Returns message_id.
        """
        if not alerts:
            return None
        return await TelegramAlert.send_message(TelegramAlert.format_alerts(snapshot, alerts))

    @staticmethod
    async def send_message(text: str) -> Optional[int]:
        """
        Sends a simple text message. Returns message_id.
        """
        if not Config.TELEGRAM_ENABLED:
            return None

        url = f"{TelegramAlert.API_URL}/bot{Config.TELEGRAM_BOT_TOKEN}/sendMessage"
        payload = {
            "chat_id": Config.TELEGRAM_CHAT_ID,
            "text": text,
            "parse_mode": "HTML",
            "disable_web_page_preview": True
        }

        try:
            timeout = aiohttp.ClientTimeout(total=Config.REQUEST_TIMEOUT)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(url, json=payload) as resp:
                    if resp.status == 200:
                        data = await resp.json(content_type=None)
                        result = data.get("result") if isinstance(data, dict) else None
                        if isinstance(result, dict):
                            return result.get("message_id")
                        logger.error(f"Unexpected Telegram response: {data!r}")
                    else:
                        logger.error(f"Failed to send Telegram alert: {resp.status} {await resp.text()}")
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"Error sending Telegram alert: {e}")
        return None
