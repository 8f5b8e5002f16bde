import os

class Config:
    # --- API ---
    # Pair lookup keyed by token address; the response may hold pairs from several chains.
    DEX_SCREENER_API_URL = os.getenv("DEX_SCREENER_API_URL", "https://api.dexscreener.com/latest/dex/tokens/")
    DEFAULT_CHAIN = os.getenv("DEFAULT_CHAIN", "solana")

    # --- SCRAPER ---
    REQUEST_TIMEOUT = 10
    MAX_RETRIES = int(os.getenv("MAX_RETRIES", "3"))
    RETRY_DELAY_EXPONENT = 2
    USER_AGENT_ROTATION = True

    # --- STORAGE ---
    DATA_DIR = os.getenv("DATA_DIR", "monitor/storage/weekly_data")
    HISTORY_LIMIT = 1000

    # --- RISK THRESHOLDS ---
    RISK_SCORE_CEILING = 70 # Never declare a certain scam
    LOW_LIQUIDITY_USD = 100000
    HIGH_VOLATILITY_PCT = 20
    IMPERMANENT_LOSS_PCT = 30
    TX_RATIO_LIMIT = 10
    NEW_TOKEN_DAYS = 7
    MIN_TXNS_FOR_PRESSURE = 10
    SELL_PRESSURE_PCT = 15
    PUMP_PCT = 50
    SUDDEN_PRICE_CHANGE_PCT = 10

    # Weights per rule, summed then clamped to RISK_SCORE_CEILING
    WEIGHTS = {
        "low_liquidity": 30,
        "high_volatility": 20,
        "impermanent_loss": 10,
        "unusual_transactions": 20,
        "mcap_below_liquidity": 20,
        "new_token": 15,
        "selling_pressure": 25,
        "possible_pump": 5,
        "sudden_price_change": 10
    }

    # --- ALERTS ---
    # Percent change versus the previous snapshot that triggers an alert
    ALERT_THRESHOLDS = {
        "price": 10,
        "volume": 50,
        "liquidity": 20
    }
    TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "")
    TELEGRAM_CHAT_ID = os.getenv("TELEGRAM_CHAT_ID", "")
    TELEGRAM_ENABLED = bool(TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID)
    DESKTOP_ALERTS = os.getenv("DESKTOP_ALERTS", "0") == "1"

    # --- INSIGHTS ---
    AI_API_KEY = os.getenv("AI_API_KEY", "")
    MAX_INSIGHTS = 5

    # --- SYSTEM ---
    POLL_INTERVAL = int(os.getenv("POLL_INTERVAL", "60"))
    PORT = int(os.getenv("PORT", "8080"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
