import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Any, Union

@dataclass(frozen=True)
class TokenRef:
    address: str = ""
    name: str = ""
    symbol: str = ""

@dataclass(frozen=True)
class TxnCounts:
    buys: int = 0
    sells: int = 0

    @property
    def total(self) -> int:
        return self.buys + self.sells

@dataclass(frozen=True)
class WindowTxns:
    m5: TxnCounts = field(default_factory=TxnCounts)
    h1: TxnCounts = field(default_factory=TxnCounts)
    h6: TxnCounts = field(default_factory=TxnCounts)
    h24: TxnCounts = field(default_factory=TxnCounts)

@dataclass(frozen=True)
class WindowValues:
    """Per-window float (volume in USD, or price change in percent)."""
    m5: float = 0.0
    h1: float = 0.0
    h6: float = 0.0
    h24: float = 0.0

@dataclass(frozen=True)
class Liquidity:
    usd: float = 0.0
    base: float = 0.0
    quote: float = 0.0

@dataclass(frozen=True)
class MarketSnapshot:
    """
    One normalized point-in-time reading of a DexScreener pair.
    Every field is always present: missing source values become 0 / "0" / "".
    """
    chain_id: str = ""
    dex_id: str = ""
    pair_address: str = ""
    url: str = ""
    base_token: TokenRef = field(default_factory=TokenRef)
    quote_token: TokenRef = field(default_factory=TokenRef)
    price_usd: str = "0" # Kept as the provider's decimal string
    price_native: str = "0"
    txns: WindowTxns = field(default_factory=WindowTxns)
    volume: WindowValues = field(default_factory=WindowValues)
    price_change: WindowValues = field(default_factory=WindowValues)
    liquidity: Liquidity = field(default_factory=Liquidity)
    fdv: float = 0.0
    market_cap: float = 0.0
    pair_created_at: int = 0 # Unix seconds

    @property
    def price(self) -> float:
        """priceUsd as a float, 0.0 if it is not a finite number."""
        try:
            value = float(self.price_usd)
        except (TypeError, ValueError):
            return 0.0
        return value if math.isfinite(value) else 0.0

@dataclass
class RiskFinding:
    risk_score: int
    vulnerabilities: List[str]
    recommendations: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "riskScore": self.risk_score,
            "vulnerabilities": list(self.vulnerabilities),
            "recommendations": list(self.recommendations)
        }

@dataclass
class SentimentResult:
    score: float
    breakdown: Dict[str, float] # social, transactions, price_action
    trends: List[str]

class AlertCategory(str, Enum):
    PRICE = "PRICE"
    VOLUME = "VOLUME"
    LIQUIDITY = "LIQUIDITY"

@dataclass(frozen=True)
class Alert:
    category: AlertCategory
    message: str

    def __str__(self) -> str:
        return self.message

@dataclass(frozen=True)
class PricePoint:
    timestamp: float
    price: float
    volume: float

@dataclass
class Report:
    token_name: str
    token_symbol: str
    timestamp: int
    metrics: Dict[str, Any]
    risk: RiskFinding
    ai_insights: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tokenName": self.token_name,
            "tokenSymbol": self.token_symbol,
            "timestamp": self.timestamp,
            "metrics": self.metrics,
            "risk": self.risk.to_dict(),
            "aiInsights": list(self.ai_insights)
        }

# --- Fetch results ---

class DegradeReason(str, Enum):
    NOT_FOUND = "not_found"
    UPSTREAM_FAILURE = "upstream_failure"

@dataclass(frozen=True)
class Ok:
    data: Dict[str, Any]
    ok = True

@dataclass(frozen=True)
class Degraded:
    reason: DegradeReason
    detail: str = ""
    ok = False

FetchResult = Union[Ok, Degraded]

def market_key(chain_id: str, token_address: str) -> str:
    """Cache and storage key for a token on a chain."""
    return f"{chain_id}-{token_address}"
