import asyncio
from collections import deque
from typing import Dict, Deque, List, Optional
from monitor.config import Config
from monitor.models.snapshot import MarketSnapshot, SentimentResult, PricePoint

class MarketCache:
    """
    Process-memory state per token key: the last snapshot and sentiment seen,
    and a bounded price history. Lost on restart.

    Callers hold lock(key) around their read-modify-write.
    """

    def __init__(self, history_limit: Optional[int] = None):
        self.history_limit = history_limit or Config.HISTORY_LIMIT
        self._snapshots: Dict[str, MarketSnapshot] = {}
        self._sentiments: Dict[str, SentimentResult] = {}
        self._history: Dict[str, Deque[PricePoint]] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def lock(self, key: str) -> asyncio.Lock:
        if key not in self._locks:
            self._locks[key] = asyncio.Lock()
        return self._locks[key]

    def get_snapshot(self, key: str) -> Optional[MarketSnapshot]:
        return self._snapshots.get(key)

    def set_snapshot(self, key: str, snapshot: MarketSnapshot):
        self._snapshots[key] = snapshot

    def get_sentiment(self, key: str) -> Optional[SentimentResult]:
        return self._sentiments.get(key)

    def set_sentiment(self, key: str, sentiment: SentimentResult):
        self._sentiments[key] = sentiment

    def append_history(self, key: str, point: PricePoint):
        if key not in self._history:
            # deque drops from the left once full
            self._history[key] = deque(maxlen=self.history_limit)
        self._history[key].append(point)

    def get_history(self, key: str) -> List[PricePoint]:
        return list(self._history.get(key, ()))
