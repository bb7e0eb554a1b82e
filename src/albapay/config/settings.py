import os
from pathlib import Path
from decimal import Decimal
from dotenv import load_dotenv

load_dotenv()

# Base directory (where data/ and output/ live)
BASE_DIR = Path(os.getenv("ALBAPAY_HOME", Path.cwd())).resolve()

# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///data/albapay.db")

# Paths
OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", BASE_DIR / "output"))
DATA_DIR = Path(os.getenv("DATA_DIR", BASE_DIR / "data"))

# Application settings
DEBUG = os.getenv("DEBUG", "False").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Holiday facts are re-fetched after this many seconds
HOLIDAY_CACHE_TTL_SECONDS = int(os.getenv("HOLIDAY_CACHE_TTL_SECONDS", "86400"))

# Korean wage rules
WITHHOLDING_RATE = Decimal('0.033')  # 3.3% business income withholding
NIGHT_PREMIUM_RATE = Decimal('0.5')
HOLIDAY_PREMIUM_RATE = Decimal('0.5')
WEEKLY_REST_MIN_HOURS = 15
WEEKLY_REST_FULL_HOURS = 40
WEEKLY_REST_PAID_HOURS = 8
