"""Configuration and settings."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Paths are relative to the working directory, not the installed package
OUTPUT_DIR = Path.cwd() / "output"

# Token files live here (one JSON file per app id variant)
TOKEN_DIR = Path(os.getenv("UBI_TOKEN_DIR", "") or Path.cwd() / "private")

# Logging
LOG_DIR = Path(os.getenv("UBI_LOG_DIR", "") or OUTPUT_DIR / "logs")
LOG_FILE = LOG_DIR / "app.jsonl"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
VERBOSE_LOGGING = os.getenv("VERBOSE_LOGGING", "false").lower() == "true"

# Ubisoft account
UBI_EMAIL = os.getenv("UBI_EMAIL", "")
UBI_PASSWORD = os.getenv("UBI_PASSWORD", "")
UBI_USER_AGENT = os.getenv(
    "UBI_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0 Safari/537.36",
)

# Session endpoint and the two Ubi-AppId values it is called with
UBI_SESSIONS_URL = os.getenv(
    "UBI_SESSIONS_URL",
    "https://public-ubiservices.ubi.com/v3/profiles/sessions",
)
UBI_APP_ID_V2 = os.getenv("UBI_APP_ID_V2", "39baebad-39e5-4552-8c25-2c9b919064e2")
UBI_APP_ID_V3 = os.getenv("UBI_APP_ID_V3", "3587dcbb-7f81-457c-9781-0e3f29f6f56a")

HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))

# Token reuse policy. Ubisoft asks for no more than 3 logins per hour.
TOKEN_EXPIRY_MARGIN_SECONDS = int(os.getenv("TOKEN_EXPIRY_MARGIN_SECONDS", "300"))
TOKEN_UNTRACKED_TTL_SECONDS = int(os.getenv("TOKEN_UNTRACKED_TTL_SECONDS", "1800"))
