import argparse
import asyncio
import json
import logging
import sys
import time
from typing import Optional
import colorama
from colorama import Fore, Style

from monitor.config import Config
from monitor.models.snapshot import Report, PricePoint, market_key
from monitor.scraper.dex_scraper import DexScraper, normalize_pair
from monitor.analyzer.risk_flags import RiskEngine
from monitor.analyzer.sentiment import SentimentEngine
from monitor.analyzer.insights import InsightProvider, PlaceholderInsightProvider
from monitor.analyzer.report import ReportBuilder
from monitor.alerts.detector import AlertDetector
from monitor.alerts.telegram import TelegramAlert
from monitor.alerts.desktop import DesktopNotifier
from monitor.storage.snapshot_store import SnapshotStore
from monitor.storage.cache import MarketCache

logger = logging.getLogger("Main")

MISSING_ARGS_MESSAGE = "chain_id and token_address are required"

def no_data_message(chain_id: str, token_address: str) -> str:
    return f"No data found for token {token_address} on {chain_id}"

class Monitor:
    """
    Runs the analysis pipeline for one token per invocation:
    fetch -> normalize -> alerts / risk / sentiment -> report -> persist.
    """

    def __init__(self, scraper: Optional[DexScraper] = None, store: Optional[SnapshotStore] = None,
                 cache: Optional[MarketCache] = None, insight_provider: Optional[InsightProvider] = None):
        self.scraper = scraper or DexScraper()
        self.store = store or SnapshotStore()
        self.cache = cache or MarketCache()
        self.insight_provider = insight_provider or PlaceholderInsightProvider()
        self.risk_engine = RiskEngine()
        self.sentiment_engine = SentimentEngine()
        self.alert_detector = AlertDetector()
        self.report_builder = ReportBuilder()
        self.running = True

    async def analyze(self, chain_id: str, token_address: str) -> Optional[Report]:
        """
        Full pipeline for one token. Returns None when no market data is available.
        """
        result = await self.scraper.fetch_pair(chain_id, token_address)
        if not result.ok:
            logger.warning(f"No data for {chain_id}:{token_address} ({result.reason.value}: {result.detail})")
            return None

        snapshot = normalize_pair(result.data)
        key = market_key(chain_id, token_address)

        async with self.cache.lock(key):
            previous = self.cache.get_snapshot(key)
            previous_sentiment = self.cache.get_sentiment(key)

            alerts = self.alert_detector.detect_alerts(snapshot, previous)
            risk = self.risk_engine.assess_risk(snapshot, previous)
            sentiment = self.sentiment_engine.assess_sentiment(snapshot, previous_sentiment)

            prior_data = self.store.load(key)
            report = self.report_builder.build_report(
                snapshot, risk, prior_data, sentiment, self.insight_provider
            )
            self.store.save(key, report)

            self.cache.set_snapshot(key, snapshot)
            self.cache.set_sentiment(key, sentiment)
            self.cache.append_history(key, PricePoint(
                timestamp=time.time(),
                price=snapshot.price,
                volume=snapshot.volume.h24
            ))

        # notifiers run after the lock is released
        if alerts:
            await self._notify(snapshot, alerts)

        logger.info(f"Analyzed {snapshot.base_token.symbol or token_address}: "
                    f"risk {risk.risk_score}, sentiment {sentiment.score:.2f}")
        return report

    async def get_token(self, chain_id: str, token_address: str) -> str:
        """
        Invocation surface: JSON report text, or an error message when no data was found.
        """
        if not chain_id or not token_address:
            return MISSING_ARGS_MESSAGE

        report = await self.analyze(chain_id, token_address)
        if report is None:
            return no_data_message(chain_id, token_address)
        return json.dumps(report.to_dict(), indent=2)

    async def watch(self, chain_id: str, token_address: str, interval: Optional[int] = None,
                    cycles: Optional[int] = None):
        """
        Polls one token until stopped (or for a fixed number of cycles).
        """
        interval = Config.POLL_INTERVAL if interval is None else interval
        logger.info(f"👀 Watching {chain_id}:{token_address} every {interval}s")
        done = 0

        while self.running:
            report = await self.analyze(chain_id, token_address)
            if report:
                print_report(report)

            done += 1
            if cycles is not None and done >= cycles:
                break
            await asyncio.sleep(interval)

    async def _notify(self, snapshot, alerts):
        mid = await TelegramAlert.send_alerts(snapshot, alerts)
        if mid:
            logger.info(f"Alerts sent to Telegram (message {mid})")
        DesktopNotifier.send_notification(snapshot, alerts)

    def stop(self):
        self.running = False
        logger.info("Stopping monitor...")

def print_report(report: Report):
    level = RiskEngine.risk_level(report.risk.risk_score)
    color = {"HIGH": Fore.RED, "MEDIUM": Fore.YELLOW}.get(level, Fore.GREEN)
    metrics = report.metrics

    print(f"\n{color}{'='*50}")
    print(f"{Style.BRIGHT}Token: {report.token_name} ({report.token_symbol})")
    print(f"{color}Risk: {report.risk.risk_score}/{Config.RISK_SCORE_CEILING} [{level}]")
    print(f"{Fore.WHITE}Price: ${metrics['price']} | Liq: ${metrics['liquidity']['usd']:,.0f} "
          f"| MC: ${metrics['marketCap']:,.0f} | FDV: ${metrics['fdv']:,.0f}")
    print(f"24h Vol: ${metrics['volume']['h24']:,.0f}")
    for vuln, rec in zip(report.risk.vulnerabilities, report.risk.recommendations):
        print(f"{Fore.RED}🚩 {vuln}{Fore.WHITE} -> {rec}")
    for insight in report.ai_insights:
        print(f"{Fore.CYAN}💡 {insight}")
    print(f"{color}{'='*50}\n")

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="liquidity-monitor",
                                     description="DEX pair risk, sentiment and alert monitor")
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Analyze a token once and print the JSON report")
    analyze.add_argument("token_address")
    analyze.add_argument("--chain", default=Config.DEFAULT_CHAIN)

    watch = sub.add_parser("watch", help="Poll a token and print each report")
    watch.add_argument("token_address")
    watch.add_argument("--chain", default=Config.DEFAULT_CHAIN)
    watch.add_argument("--interval", type=int, default=Config.POLL_INTERVAL)

    serve = sub.add_parser("serve", help="Expose /get_token over HTTP")
    serve.add_argument("--port", type=int, default=Config.PORT)
    return parser

async def run(args) -> int:
    monitor = Monitor()

    if args.command == "analyze":
        print(await monitor.get_token(args.chain, args.token_address))
        return 0

    if args.command == "watch":
        await monitor.watch(args.chain, args.token_address, args.interval)
        return 0

    from monitor.server import start_server
    await start_server(monitor, args.port)
    while monitor.running:
        await asyncio.sleep(3600)
    return 0

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    colorama.init(autoreset=True)

    # Windows selector loop policy fix
    if sys.platform == 'win32':
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        return 0

if __name__ == "__main__":
    sys.exit(main())
