# ecofootprint/config.py
from dotenv import load_dotenv
load_dotenv()  # load .env before anything else

import os

# --- cache -------------------------------------------------------------------
REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = os.getenv("REDIS_PORT", "6379")
# REDIS_URL= (empty) turns the result cache off entirely
REDIS_URL = os.getenv("REDIS_URL", f"redis://{REDIS_HOST}:{REDIS_PORT}/0")
REDIS_SOCKET_TIMEOUT = float(os.getenv("REDIS_SOCKET_TIMEOUT", "1.0"))

CACHE_TTL = 3600  # 1 hour
CACHE_PREFIX = "footprint:"

# --- scraping ----------------------------------------------------------------
FETCH_TIMEOUT = 10
USER_AGENT = "Mozilla/5.0 (compatible; EcoFootprintBot/1.0)"

# --- logging -----------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
