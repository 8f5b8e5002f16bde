import logging
from typing import List
from plyer import notification
from monitor.config import Config
from monitor.models.snapshot import Alert, MarketSnapshot

logger = logging.getLogger(__name__)

class DesktopNotifier:
    @staticmethod
    def send_notification(snapshot: MarketSnapshot, alerts: List[Alert]) -> bool:
        """
        Shows a desktop notification summarising the alerts. Off unless DESKTOP_ALERTS=1.
        """
        if not Config.DESKTOP_ALERTS or not alerts:
            return False

        title = f"📈 Liquidity Monitor: {snapshot.base_token.symbol}"
        message = "\n".join(str(alert) for alert in alerts)

        try:
            notification.notify(
                title=title,
                message=message,
                app_name="Liquidity Monitor",
                timeout=10
            )
            return True
        except Exception as e:
            # plyer backends raise their own error types
            logger.error(f"Desktop notification failed: {e}")
            return False
