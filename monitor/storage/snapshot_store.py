import json
import logging
import os
from typing import Optional, Dict, Any, Union
from monitor.config import Config
from monitor.models.snapshot import Report

logger = logging.getLogger(__name__)

class SnapshotStore:
    """
    One pretty-printed JSON document per token key.

    Despite the "weekly" file name this holds only the most recent report:
    every save fully overwrites the previous document.
    """

    def __init__(self, data_dir: Optional[str] = None):
        self.data_dir = data_dir or Config.DATA_DIR

    @staticmethod
    def safe_key(key: str) -> str:
        return key.replace("/", "_")

    def path_for(self, key: str) -> str:
        return os.path.join(self.data_dir, f"{self.safe_key(key)}_weekly.json")

    def load(self, key: str) -> Optional[Dict[str, Any]]:
        """
        Last saved report for key, or None if it is missing or unreadable.
        """
        path = self.path_for(key)
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load weekly data for {key}: {e}")
            return None

    def save(self, key: str, report: Union[Report, Dict[str, Any]]):
        data = report.to_dict() if isinstance(report, Report) else report
        path = self.path_for(key)
        try:
            os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to save weekly data for {key}: {e}")
