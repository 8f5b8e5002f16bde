import aiohttp
import asyncio
import logging
from typing import Optional
from monitor.config import Config
from monitor.scraper.anti_block import AntiBlock
from monitor.models.snapshot import Ok, Degraded, DegradeReason, FetchResult

logger = logging.getLogger(__name__)

class DexAPI:
    def __init__(self, base_url: Optional[str] = None, max_retries: Optional[int] = None,
                 timeout: Optional[float] = None):
        self.base_url = base_url or Config.DEX_SCREENER_API_URL
        self.max_retries = max(1, max_retries if max_retries is not None else Config.MAX_RETRIES)
        self.timeout = timeout or Config.REQUEST_TIMEOUT
        self.anti_block = AntiBlock()

    async def get_pairs_by_token_address(self, token_address: str) -> FetchResult:
        """
        Fetches pairs for a specific token address.
        Ok({"pairs": [...]}) on success; Degraded on a null or empty list, an upstream
        error, or when all attempts together exceed the timeout.
        """
        url = f"{self.base_url}{token_address}"
        try:
            # one deadline covers every retry and backoff
            result = await asyncio.wait_for(self._make_request(url), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(f"Timeout fetching {url}")
            return Degraded(DegradeReason.UPSTREAM_FAILURE, f"timed out after {self.timeout}s")
        if not result.ok:
            return result

        data = result.data
        if not isinstance(data, dict):
            return Degraded(DegradeReason.UPSTREAM_FAILURE, f"unexpected payload from {url}")

        pairs = data.get("pairs") or [] # null when the token is unknown
        if not pairs:
            return Degraded(DegradeReason.NOT_FOUND, f"no pairs for {token_address}")
        return Ok({"pairs": pairs})

    async def _make_request(self, url: str) -> FetchResult:
        """
        Internal method to handle requests with retries and anti-block.
        """
        headers = self.anti_block.get_headers()
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        detail = ""

        for attempt in range(self.max_retries):
            try:
                async with aiohttp.ClientSession(timeout=timeout) as session:
                    async with session.get(url, headers=headers) as response:
                        if response.status == 200:
                            return Ok(await response.json(content_type=None))
                        elif response.status == 429:
                            detail = "rate limited"
                            logger.warning(f"Rate limited on {url}. Retrying...")
                        else:
                            detail = f"status {response.status}"
                            logger.error(f"Failed to fetch {url}: Status {response.status}")

            except asyncio.TimeoutError:
                detail = f"timed out after {self.timeout}s"
                logger.error(f"Timeout fetching {url}")
            except (aiohttp.ClientError, ValueError) as e:
                detail = str(e) or type(e).__name__
                logger.error(f"Error fetching {url}: {e}")

            if attempt + 1 < self.max_retries:
                await self.anti_block.backoff(attempt)

        return Degraded(DegradeReason.UPSTREAM_FAILURE, detail)
