import time
import pytest

DAY = 86400

def mock_pair(price="1.0", liquidity_usd=500000, market_cap=1000000, fdv=1000000,
              price_change=None, volume=None, txns=None, age_days=100,
              chain_id="solana", symbol="TEST", address="TokenAddr111", now=None):
    """Raw DexScreener-style pair record; healthy defaults trip no risk rule."""
    now = time.time() if now is None else now
    return {
        "chainId": chain_id,
        "dexId": "raydium",
        "url": f"https://dexscreener.com/{chain_id}/pair111",
        "pairAddress": "Pair111",
        "baseToken": {"address": address, "name": f"{symbol} Coin", "symbol": symbol},
        "quoteToken": {"address": "So11111111111111111111111111111111111111112", "name": "Wrapped SOL", "symbol": "SOL"},
        "priceNative": "0.005",
        "priceUsd": price,
        "txns": txns or {
            "m5": {"buys": 1, "sells": 1},
            "h1": {"buys": 10, "sells": 5},
            "h6": {"buys": 40, "sells": 20},
            "h24": {"buys": 100, "sells": 10}
        },
        "volume": volume or {"m5": 100, "h1": 5000, "h6": 20000, "h24": 80000},
        "priceChange": price_change or {"m5": 0, "h1": 1, "h6": 2, "h24": 3},
        "liquidity": {"usd": liquidity_usd, "base": 1000000, "quote": 2500},
        "fdv": fdv,
        "marketCap": market_cap,
        "pairCreatedAt": int((now - age_days * DAY) * 1000)
    }

@pytest.fixture
def make_pair():
    return mock_pair
