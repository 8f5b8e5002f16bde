import asyncio
import json
import os
from monitor.storage.snapshot_store import SnapshotStore
from monitor.storage.cache import MarketCache
from monitor.models.snapshot import PricePoint, RiskFinding, Report, market_key
from monitor.scraper.dex_scraper import normalize_pair
from conftest import mock_pair

def sample_report(symbol="TEST", score=30):
    return Report(
        token_name=f"{symbol} Coin",
        token_symbol=symbol,
        timestamp=1700000000,
        metrics={"price": "1.0"},
        risk=RiskFinding(risk_score=score, vulnerabilities=["Low liquidity"],
                         recommendations=["Use small position sizes and expect high slippage"]),
        ai_insights=["insight"]
    )

def test_market_key():
    assert market_key("solana", "TokenAddr111") == "solana-TokenAddr111"

def test_key_is_made_filesystem_safe(tmp_path):
    store = SnapshotStore(str(tmp_path))
    path = store.path_for("solana-abc/def/ghi")

    assert os.path.dirname(path) == str(tmp_path)
    assert os.path.basename(path) == "solana-abc_def_ghi_weekly.json"

def test_save_then_load(tmp_path):
    store = SnapshotStore(str(tmp_path / "nested"))
    store.save("solana-TKN", sample_report())

    loaded = store.load("solana-TKN")
    assert loaded["tokenSymbol"] == "TEST"
    assert loaded["risk"]["riskScore"] == 30
    assert loaded["aiInsights"] == ["insight"]

    # pretty printed
    with open(store.path_for("solana-TKN"), encoding="utf-8") as f:
        assert f.read().startswith("{\n  ")

def test_save_overwrites_previous_document(tmp_path):
    store = SnapshotStore(str(tmp_path))
    store.save("solana-TKN", sample_report(score=30))
    store.save("solana-TKN", sample_report(score=55))

    assert store.load("solana-TKN")["risk"]["riskScore"] == 55
    assert len(os.listdir(tmp_path)) == 1

def test_missing_file_loads_as_none(tmp_path):
    assert SnapshotStore(str(tmp_path)).load("solana-nothing") is None

def test_corrupt_file_loads_as_none(tmp_path):
    store = SnapshotStore(str(tmp_path))
    with open(store.path_for("solana-bad"), "w", encoding="utf-8") as f:
        f.write("{not json")

    assert store.load("solana-bad") is None

def test_save_failure_is_swallowed(tmp_path):
    blocker = tmp_path / "occupied"
    blocker.write_text("a file, not a directory")
    store = SnapshotStore(str(blocker))

    store.save("solana-TKN", sample_report())
    assert store.load("solana-TKN") is None

def test_save_accepts_plain_dict(tmp_path):
    store = SnapshotStore(str(tmp_path))
    store.save("solana-TKN", {"tokenSymbol": "RAW"})
    assert json.loads((tmp_path / "solana-TKN_weekly.json").read_text())["tokenSymbol"] == "RAW"

def test_history_is_capped_oldest_first():
    cache = MarketCache()
    for i in range(1005):
        cache.append_history("k", PricePoint(timestamp=i, price=float(i), volume=0.0))

    history = cache.get_history("k")
    assert len(history) == 1000
    assert history[0].timestamp == 5
    assert history[-1].timestamp == 1004

def test_history_limit_is_configurable():
    cache = MarketCache(history_limit=3)
    for i in range(10):
        cache.append_history("k", PricePoint(timestamp=i, price=1.0, volume=1.0))
        assert len(cache.get_history("k")) <= 3
    assert [p.timestamp for p in cache.get_history("k")] == [7, 8, 9]
    assert cache.get_history("other") == []

def test_snapshots_are_kept_per_key():
    cache = MarketCache()
    first = normalize_pair(mock_pair(price="1.0"))
    second = normalize_pair(mock_pair(price="2.0"))

    assert cache.get_snapshot("a") is None
    cache.set_snapshot("a", first)
    cache.set_snapshot("b", second)
    cache.set_snapshot("a", second)
    assert cache.get_snapshot("a") is second
    assert cache.get_snapshot("b") is second

def test_one_lock_per_key():
    async def run():
        cache = MarketCache()
        assert cache.lock("a") is cache.lock("a")
        assert cache.lock("a") is not cache.lock("b")

        order = []

        async def worker(name):
            async with cache.lock("a"):
                order.append(f"{name}-in")
                await asyncio.sleep(0.01)
                order.append(f"{name}-out")

        await asyncio.gather(worker("x"), worker("y"))
        return order

    order = asyncio.run(run())
    assert order == ["x-in", "x-out", "y-in", "y-out"]
