import logging
from typing import List, Optional
from monitor.config import Config
from monitor.models.snapshot import MarketSnapshot, Alert, AlertCategory
from monitor.analyzer.parameters import ParameterExtractor

logger = logging.getLogger(__name__)

class AlertDetector:
    """
    Compares the current snapshot against the last one seen for the same token
    and reports price, 1h volume and USD liquidity moves above their thresholds.
    """

    def __init__(self, thresholds: Optional[dict] = None):
        self.thresholds = thresholds or Config.ALERT_THRESHOLDS

    def detect_alerts(self, current: MarketSnapshot, previous: Optional[MarketSnapshot]) -> List[Alert]:
        if previous is None:
            return []

        symbol = current.base_token.symbol or current.base_token.address
        checks = [
            (AlertCategory.PRICE, "price", "price", current.price, previous.price),
            (AlertCategory.VOLUME, "volume", "1h volume", current.volume.h1, previous.volume.h1),
            (AlertCategory.LIQUIDITY, "liquidity", "liquidity", current.liquidity.usd, previous.liquidity.usd),
        ]

        alerts = []
        for category, metric, label, now_value, prev_value in checks:
            change = ParameterExtractor.pct_change(now_value, prev_value)
            if change is None or abs(change) <= self.thresholds[metric]:
                continue

            direction = "increased" if change > 0 else "decreased"
            alerts.append(Alert(
                category=category,
                message=f"{category.value} ALERT: {symbol} {label} {direction} by {abs(change):.2f}%"
            ))

        for alert in alerts:
            logger.warning(str(alert))
        return alerts
