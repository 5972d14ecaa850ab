"""
Configuration — loads from .env, provides defaults.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Telegram (optional: without a token only the web widget runs)
TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "")
OWNER_CHAT_ID = int(os.getenv("OWNER_CHAT_ID", "0"))

# Web widget
WIDGET_HOST = os.getenv("WIDGET_HOST", "127.0.0.1")
WIDGET_PORT = int(os.getenv("WIDGET_PORT", "8080"))
WIDGET_SECRET = os.getenv("WIDGET_SECRET", "change-me-in-production")  # signs session cookies
MAX_WIDGETS = int(os.getenv("MAX_WIDGETS", "1000"))  # per-session widgets kept in memory

# Open-Meteo endpoints
GEO_URL = os.getenv("GEO_URL", "https://geocoding-api.open-meteo.com/v1/search")
REVERSE_GEO_URL = os.getenv("REVERSE_GEO_URL", "https://geocoding-api.open-meteo.com/v1/reverse")
FORECAST_URL = os.getenv("FORECAST_URL", "https://api.open-meteo.com/v1/forecast")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))  # seconds

# Widget defaults
DEFAULT_CITY = os.getenv("DEFAULT_CITY", "Atlanta")
DEFAULT_UNIT = os.getenv("DEFAULT_UNIT", "C").upper()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
