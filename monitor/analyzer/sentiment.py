from typing import Optional
from monitor.models.snapshot import MarketSnapshot, SentimentResult
from monitor.analyzer.parameters import ParameterExtractor

# Component weights for the overall score
TX_WEIGHT = 0.4
PRICE_WEIGHT = 0.4
SOCIAL_WEIGHT = 0.2
SHIFT_THRESHOLD = 0.3

def clamp(value: float, low: float = -1.0, high: float = 1.0) -> float:
    return max(low, min(high, value))

class SentimentEngine:
    def assess_sentiment(self, current: MarketSnapshot,
                         previous_sentiment: Optional[SentimentResult] = None) -> SentimentResult:
        """
        Directional market sentiment from 24h order flow and 1h/24h price action.
        The overall score is a weighted blend and is not clamped; only the
        price-action component is bounded to [-1, 1].
        """
        h1 = current.price_change.h1
        h24 = current.price_change.h24

        tx_sentiment = ParameterExtractor.get_buy_sell_balance(current)
        price_sentiment = clamp(0.6 * (h1 / 100) + 0.4 * (h24 / 100))
        # Proxy until a real social feed exists; may exceed +-1
        social_sentiment = 0.3 * (h1 / 100) + 0.7 * (h24 / 100)

        overall = (TX_WEIGHT * tx_sentiment
                   + PRICE_WEIGHT * price_sentiment
                   + SOCIAL_WEIGHT * social_sentiment)

        trends = [self._label(overall)]

        if h1 > 0 and h24 < 0:
            trends.append("Positive momentum vs negative trend")
        elif h1 < 0 and h24 > 0:
            trends.append("Negative momentum vs positive trend")

        counts = current.txns.h24
        if counts.buys > 2 * counts.sells:
            trends.append("Strong buying pressure")
        elif counts.sells > 2 * counts.buys:
            trends.append("Strong selling pressure")

        if previous_sentiment is not None and abs(overall - previous_sentiment.score) > SHIFT_THRESHOLD:
            direction = "positive" if overall > previous_sentiment.score else "negative"
            trends.append(f"Significant {direction} shift")

        return SentimentResult(
            score=overall,
            breakdown={
                "social": social_sentiment,
                "transactions": tx_sentiment,
                "price_action": price_sentiment
            },
            trends=trends
        )

    @staticmethod
    def _label(overall: float) -> str:
        if overall > 0.7:
            return "Strong bullish"
        elif overall > 0.3:
            return "Moderate bullish"
        elif overall < -0.7:
            return "Strong bearish"
        elif overall < -0.3:
            return "Moderate bearish"
        return "Neutral"
