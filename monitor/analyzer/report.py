import time
import logging
from dataclasses import asdict
from typing import Dict, Any, Optional
from monitor.config import Config
from monitor.models.snapshot import MarketSnapshot, RiskFinding, SentimentResult, Report
from monitor.analyzer.insights import InsightProvider, FAILED_MESSAGE

logger = logging.getLogger(__name__)

class ReportBuilder:
    def build_report(self, snapshot: MarketSnapshot, risk: RiskFinding,
                     prior_data: Optional[Dict[str, Any]], sentiment: SentimentResult,
                     insight_provider: InsightProvider, now: Optional[float] = None) -> Report:
        """
        Assembles the persisted/returned report.
        prior_data is handed to the insight provider only; it is not part of the output.
        """
        try:
            insights = list(insight_provider.generate(snapshot, prior_data, sentiment))
        except Exception as e:
            # Insight generation must never block the report
            logger.error(f"Insight generation failed: {e}")
            insights = [FAILED_MESSAGE]

        return Report(
            token_name=snapshot.base_token.name,
            token_symbol=snapshot.base_token.symbol,
            timestamp=int(time.time() if now is None else now),
            metrics={
                "price": snapshot.price_usd,
                "volume": asdict(snapshot.volume),
                "liquidity": asdict(snapshot.liquidity),
                "marketCap": snapshot.market_cap,
                "fdv": snapshot.fdv,
                "transactions": asdict(snapshot.txns)
            },
            risk=risk,
            ai_insights=insights[:Config.MAX_INSIGHTS]
        )
