import logging
from typing import List, Dict, Any, Optional
from monitor.config import Config
from monitor.models.snapshot import MarketSnapshot, SentimentResult

logger = logging.getLogger("Insights")

NO_KEY_MESSAGE = "AI insights unavailable: no API key configured"
FAILED_MESSAGE = "AI insights unavailable: insight generator failed"

class InsightProvider:
    """
    Capability interface for advisory text about a token.
    Implementations return an ordered list of short strings.
    """

    def generate(self, snapshot: MarketSnapshot, stored_data: Optional[Dict[str, Any]],
                 sentiment: SentimentResult) -> List[str]:
        raise NotImplementedError

class PlaceholderInsightProvider(InsightProvider):
    """
    Stand-in for a model-backed generator.
    Without an API key it returns a single sentinel message.
    """

    def __init__(self, api_key: Optional[str] = None):
        self.api_key = Config.AI_API_KEY if api_key is None else api_key

    def generate(self, snapshot, stored_data, sentiment):
        if not self.api_key:
            return [NO_KEY_MESSAGE]

        symbol = snapshot.base_token.symbol or "token"
        insights = [f"{symbol} sentiment: {trend}" for trend in sentiment.trends]
        insights.append(
            f"24h volume ${snapshot.volume.h24:,.0f} against ${snapshot.liquidity.usd:,.0f} liquidity"
        )
        return insights[:Config.MAX_INSIGHTS]
