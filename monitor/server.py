from aiohttp import web
import json
import logging
from monitor.config import Config
from monitor.main import no_data_message

logger = logging.getLogger("Server")

MONITOR_KEY = web.AppKey("monitor", object)

async def root_handler(request):
    return web.Response(text="📈 Liquidity Monitor is running")

async def get_token_handler(request):
    """
    GET /get_token?token_address=...&chain_id=...
    200 with the JSON report, 404 with an error message when no data exists.
    """
    token_address = request.query.get("token_address", "").strip()
    chain_id = request.query.get("chain_id", "").strip() or Config.DEFAULT_CHAIN
    if not token_address:
        return web.Response(status=400, text="token_address is required")

    monitor = request.app[MONITOR_KEY]
    report = await monitor.analyze(chain_id, token_address)
    if report is None:
        return web.Response(status=404, text=no_data_message(chain_id, token_address))
    return web.json_response(report.to_dict(), dumps=_pretty_dumps)

def _pretty_dumps(data) -> str:
    return json.dumps(data, indent=2)

def create_app(monitor) -> web.Application:
    app = web.Application()
    app[MONITOR_KEY] = monitor
    app.router.add_get('/', root_handler)
    app.router.add_get('/get_token', get_token_handler)
    return app

async def start_server(monitor, port=None):
    app = create_app(monitor)
    port = port or Config.PORT
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, '0.0.0.0', port)

    logger.info(f"🌍 Server started on port {port}")
    await site.start()
    return runner
