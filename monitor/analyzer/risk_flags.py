from typing import Optional
from monitor.config import Config
from monitor.models.snapshot import MarketSnapshot, RiskFinding
from monitor.analyzer.parameters import ParameterExtractor

class RiskEngine:
    """
    Heuristic manipulation / liquidity / volatility risk scoring.

    Rules are evaluated in a fixed order. Each fired rule appends one
    vulnerability and its matching recommendation, and adds its weight.
    The total is clamped to Config.RISK_SCORE_CEILING.
    """

    def __init__(self):
        self.weights = Config.WEIGHTS
        self.ceiling = Config.RISK_SCORE_CEILING

    def assess_risk(self, current: MarketSnapshot, previous: Optional[MarketSnapshot] = None,
                    now: Optional[float] = None) -> RiskFinding:
        vulnerabilities = []
        recommendations = []
        score = 0

        def flag(rule: str, vulnerability: str, recommendation: str):
            nonlocal score
            score += self.weights[rule]
            vulnerabilities.append(vulnerability)
            recommendations.append(recommendation)

        # 1. Low Liquidity
        if current.liquidity.usd < Config.LOW_LIQUIDITY_USD:
            flag("low_liquidity", "Low liquidity",
                 "Use small position sizes and expect high slippage")

        # 2. Volatility (and, only then, impermanent loss)
        h6 = current.price_change.h6
        if abs(h6) > Config.HIGH_VOLATILITY_PCT:
            flag("high_volatility", f"High volatility: {h6:.2f}% over 6h",
                 "Use limit orders and tight stop losses")
            if abs(h6) > Config.IMPERMANENT_LOSS_PCT:
                flag("impermanent_loss", "High impermanent loss risk",
                     "Avoid providing liquidity until volatility settles")

        # 3. Transaction burst
        if current.txns.h1.total > 0 and ParameterExtractor.get_tx_ratio(current) > Config.TX_RATIO_LIMIT:
            flag("unusual_transactions", "Unusual transaction pattern",
                 "Check for wash trading or bot activity")

        # 4. Market cap below pool value
        if 0 < current.market_cap < current.liquidity.usd:
            flag("mcap_below_liquidity", "Market cap < liquidity",
                 "Verify token supply and market cap data")

        # 5. Age
        age_days = ParameterExtractor.get_token_age_days(current, now)
        if age_days < Config.NEW_TOKEN_DAYS:
            flag("new_token", f"New token ({age_days:.1f} days old)",
                 "Wait for trading history to develop before committing capital")

        # 6. Selling pressure
        if current.txns.h24.total > Config.MIN_TXNS_FOR_PRESSURE:
            sell_pct = ParameterExtractor.get_sell_pct(current)
            if sell_pct > Config.SELL_PRESSURE_PCT:
                flag("selling_pressure", f"High selling pressure: {sell_pct:.2f}%",
                     "Monitor for large holders exiting")

        # 7. Pump
        h24 = current.price_change.h24
        if h24 > Config.PUMP_PCT:
            flag("possible_pump", f"Possible pump: {h24:.2f}%",
                 "Be cautious of pump-and-dump schemes")

        # 8. Jump since the last reading
        if previous is not None:
            change = ParameterExtractor.pct_change(current.price, previous.price)
            if change is not None and abs(change) > Config.SUDDEN_PRICE_CHANGE_PCT:
                flag("sudden_price_change", f"Sudden price change: {abs(change):.2f}%",
                     "Investigate recent news or large trades")

        return RiskFinding(
            risk_score=min(score, self.ceiling),
            vulnerabilities=vulnerabilities,
            recommendations=recommendations
        )

    @staticmethod
    def risk_level(risk_score: int) -> str:
        """Coarse label used for console and notification output."""
        if risk_score >= 50:
            return "HIGH"
        elif risk_score >= 25:
            return "MEDIUM"
        return "LOW"
