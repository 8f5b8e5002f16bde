import asyncio
import random
import logging
from monitor.config import Config

logger = logging.getLogger(__name__)

class AntiBlock:
    def __init__(self):
        self.user_agents = [
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.2 Safari/605.1.15",
            "Mozilla/5.0 (X11; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0"
        ]

    def get_headers(self) -> dict:
        """
        JSON request headers with a (possibly rotated) User-Agent.
        """
        ua = random.choice(self.user_agents) if Config.USER_AGENT_ROTATION else self.user_agents[0]
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": ua
        }

    def backoff_delay(self, attempt: int) -> float:
        return (Config.RETRY_DELAY_EXPONENT ** attempt) + random.uniform(0, 1)

    async def backoff(self, attempt: int):
        """
        Exponential backoff sleep.
        """
        delay = self.backoff_delay(attempt)
        logger.warning(f"Backing off for {delay:.2f}s (Attempt {attempt})")
        await asyncio.sleep(delay)
