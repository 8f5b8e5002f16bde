import logging
import math
from typing import List, Optional, Any, Dict
from monitor.scraper.dex_api import DexAPI
from monitor.models.snapshot import (
    MarketSnapshot, TokenRef, TxnCounts, WindowTxns, WindowValues, Liquidity,
    Ok, Degraded, DegradeReason, FetchResult
)

logger = logging.getLogger(__name__)

# pairCreatedAt above this is in milliseconds
_MS_THRESHOLD = 10 ** 11

def _safe_float(val: Any, default: float = 0.0) -> float:
    if isinstance(val, (dict, list, bool, type(None))):
        return default
    try:
        result = float(val)
    except (TypeError, ValueError):
        return default
    # NaN, Infinity and overflowed strings like "1e400"
    return result if math.isfinite(result) else default

def _safe_int(val: Any, default: int = 0) -> int:
    return int(_safe_float(val, default))

def _safe_dict(val: Any) -> Dict[str, Any]:
    return val if isinstance(val, dict) else {}

def _safe_str(val: Any, default: str = "") -> str:
    if val is None or isinstance(val, (dict, list)):
        return default
    return str(val)

def _token_ref(data: Any) -> TokenRef:
    data = _safe_dict(data)
    return TokenRef(
        address=_safe_str(data.get("address")),
        name=_safe_str(data.get("name")),
        symbol=_safe_str(data.get("symbol"))
    )

def _windows(data: Any) -> WindowValues:
    data = _safe_dict(data)
    return WindowValues(
        m5=_safe_float(data.get("m5")),
        h1=_safe_float(data.get("h1")),
        h6=_safe_float(data.get("h6")),
        h24=_safe_float(data.get("h24"))
    )

def _txn_counts(data: Any) -> TxnCounts:
    data = _safe_dict(data)
    return TxnCounts(buys=_safe_int(data.get("buys")), sells=_safe_int(data.get("sells")))

def normalize_pair(data: Dict[str, Any]) -> MarketSnapshot:
    """
    Converts a raw DexScreener pair record into a MarketSnapshot.
    Never fails: absent or unparsable values become 0 (prices "0").
    """
    data = _safe_dict(data)
    txns = _safe_dict(data.get("txns"))
    liquidity = _safe_dict(data.get("liquidity"))

    # DexScreener reports ms
    created_at = _safe_int(data.get("pairCreatedAt"))
    if created_at > _MS_THRESHOLD:
        created_at //= 1000

    return MarketSnapshot(
        chain_id=_safe_str(data.get("chainId")),
        dex_id=_safe_str(data.get("dexId")),
        pair_address=_safe_str(data.get("pairAddress")),
        url=_safe_str(data.get("url")),
        base_token=_token_ref(data.get("baseToken")),
        quote_token=_token_ref(data.get("quoteToken")),

        price_usd=_safe_str(data.get("priceUsd"), "0") or "0",
        price_native=_safe_str(data.get("priceNative"), "0") or "0",

        txns=WindowTxns(
            m5=_txn_counts(txns.get("m5")),
            h1=_txn_counts(txns.get("h1")),
            h6=_txn_counts(txns.get("h6")),
            h24=_txn_counts(txns.get("h24"))
        ),
        volume=_windows(data.get("volume")),
        price_change=_windows(data.get("priceChange")),
        liquidity=Liquidity(
            usd=_safe_float(liquidity.get("usd")),
            base=_safe_float(liquidity.get("base")),
            quote=_safe_float(liquidity.get("quote"))
        ),
        fdv=_safe_float(data.get("fdv")),
        market_cap=_safe_float(data.get("marketCap")),
        pair_created_at=created_at
    )

def select_pair(pairs: List[Dict[str, Any]], chain_id: str) -> Optional[Dict[str, Any]]:
    """First pair listed on the requested chain, if any."""
    wanted = chain_id.lower()
    for pair in pairs or []:
        if isinstance(pair, dict) and _safe_str(pair.get("chainId")).lower() == wanted:
            return pair
    return None

class DexScraper:
    def __init__(self, api: Optional[DexAPI] = None):
        self.api = api or DexAPI()

    async def fetch_pair(self, chain_id: str, token_address: str) -> FetchResult:
        """
        Fetches the pair for token_address on chain_id.
        Returns Ok(raw_pair) or Degraded(reason); never raises.
        """
        result = await self.api.get_pairs_by_token_address(token_address)
        if not result.ok:
            return result

        pair = select_pair(result.data.get("pairs", []), chain_id)
        if pair is None:
            logger.info(f"No {chain_id} pair for {token_address}")
            return Degraded(DegradeReason.NOT_FOUND, f"no {chain_id} pair for {token_address}")

        return Ok(pair)

    async def fetch_snapshot(self, chain_id: str, token_address: str) -> Optional[MarketSnapshot]:
        """Convenience wrapper: normalized snapshot, or None when no data."""
        result = await self.fetch_pair(chain_id, token_address)
        if not result.ok:
            return None
        return normalize_pair(result.data)
