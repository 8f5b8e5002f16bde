import itertools
import pytest
from monitor.scraper.dex_scraper import normalize_pair
from monitor.analyzer.sentiment import SentimentEngine
from monitor.models.snapshot import SentimentResult
from conftest import mock_pair

LADDER = {"Strong bullish", "Moderate bullish", "Strong bearish", "Moderate bearish", "Neutral"}

def snapshot(h1=0, h24=0, buys=0, sells=0):
    return normalize_pair(mock_pair(
        price_change={"h1": h1, "h24": h24},
        txns={"h24": {"buys": buys, "sells": sells}}
    ))

def test_no_trades_gives_zero_transaction_sentiment():
    result = SentimentEngine().assess_sentiment(snapshot())

    assert result.breakdown["transactions"] == 0
    assert result.score == 0
    assert result.trends == ["Neutral"]

def test_strong_bullish():
    result = SentimentEngine().assess_sentiment(snapshot(h1=50, h24=100, buys=100, sells=0))

    assert result.breakdown["transactions"] == pytest.approx(1.0)
    assert result.breakdown["price_action"] == pytest.approx(0.7)
    assert result.breakdown["social"] == pytest.approx(0.85)
    assert result.score == pytest.approx(0.85)
    assert result.trends == ["Strong bullish", "Strong buying pressure"]

def test_bearish_with_selling_pressure():
    result = SentimentEngine().assess_sentiment(snapshot(h1=-10, h24=-40, buys=10, sells=40))

    # tx -0.6, price -0.22, social -0.31
    assert result.score == pytest.approx(-0.39)
    assert result.trends == ["Moderate bearish", "Strong selling pressure"]

def test_price_action_is_clamped_but_overall_is_not():
    result = SentimentEngine().assess_sentiment(snapshot(h1=500, h24=500, buys=10, sells=0))

    assert result.breakdown["price_action"] == 1.0
    assert result.breakdown["social"] == pytest.approx(5.0)
    assert result.score == pytest.approx(0.4 + 0.4 + 1.0)

    crash = SentimentEngine().assess_sentiment(snapshot(h1=-900, h24=-900, buys=0, sells=10))
    assert crash.breakdown["price_action"] == -1.0
    assert crash.score < -1

def test_momentum_divergence():
    engine = SentimentEngine()
    up_now = engine.assess_sentiment(snapshot(h1=5, h24=-10, buys=10, sells=10))
    assert up_now.trends == ["Neutral", "Positive momentum vs negative trend"]

    down_now = engine.assess_sentiment(snapshot(h1=-5, h24=10, buys=10, sells=10))
    assert down_now.trends == ["Neutral", "Negative momentum vs positive trend"]

def test_significant_shift_against_previous_sentiment():
    engine = SentimentEngine()
    current = snapshot(h1=50, h24=100, buys=100, sells=0)

    up = engine.assess_sentiment(current, SentimentResult(score=-0.5, breakdown={}, trends=[]))
    assert up.trends[-1] == "Significant positive shift"

    down = engine.assess_sentiment(snapshot(h1=-10, h24=-40, buys=10, sells=40),
                                   SentimentResult(score=0.2, breakdown={}, trends=[]))
    assert down.trends[-1] == "Significant negative shift"

    steady = engine.assess_sentiment(current, SentimentResult(score=0.8, breakdown={}, trends=[]))
    assert not any("shift" in t for t in steady.trends)

def test_exactly_one_ladder_label():
    engine = SentimentEngine()
    grid = itertools.product((-200, -30, 0, 30, 200), (-200, -30, 0, 30, 200), (0, 5, 50), (0, 5, 50))
    for h1, h24, buys, sells in grid:
        result = engine.assess_sentiment(snapshot(h1, h24, buys, sells))
        assert len([t for t in result.trends if t in LADDER]) == 1
        assert result.trends[0] in LADDER
        assert -1.0 <= result.breakdown["price_action"] <= 1.0
