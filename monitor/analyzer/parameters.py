import time
from typing import Optional
from monitor.models.snapshot import MarketSnapshot

class ParameterExtractor:
    @staticmethod
    def get_token_age_days(snapshot: MarketSnapshot, now: Optional[float] = None) -> float:
        """Days since the pair was created"""
        now = time.time() if now is None else now
        return (now - snapshot.pair_created_at) / 86400

    @staticmethod
    def get_tx_ratio(snapshot: MarketSnapshot) -> float:
        """6h transactions relative to 1h transactions (0 when no 1h activity)"""
        h1_total = snapshot.txns.h1.total
        if h1_total <= 0:
            return 0.0
        return snapshot.txns.h6.total / h1_total

    @staticmethod
    def get_sell_pct(snapshot: MarketSnapshot) -> float:
        """Share of 24h transactions that were sells, in percent"""
        total = snapshot.txns.h24.total
        if total == 0:
            return 0.0
        return snapshot.txns.h24.sells / total * 100

    @staticmethod
    def get_buy_sell_balance(snapshot: MarketSnapshot) -> float:
        """(buys - sells) / (buys + sells) over 24h, in [-1, 1]"""
        counts = snapshot.txns.h24
        if counts.total == 0:
            return 0.0
        return (counts.buys - counts.sells) / counts.total

    @staticmethod
    def pct_change(current: float, previous: float) -> Optional[float]:
        """Signed percent change, None when there is no positive baseline"""
        if previous <= 0:
            return None
        return (current - previous) / previous * 100
