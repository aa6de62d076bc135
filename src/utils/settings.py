# src/utils/settings.py
import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# --- Path Configuration ---
DATA_DIR = BASE_DIR / os.getenv("INVENTORY_DATA_DIR", "data")
REPORTS_DIR = BASE_DIR / os.getenv("REPORTS_DIR", "reports")
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")

PRODUCTS_FILE = DATA_DIR / os.getenv("PRODUCTS_FILE", "products.json")
TRANSACTIONS_FILE = DATA_DIR / os.getenv("TRANSACTIONS_FILE", "transactions.csv")

# --- Export ---
SAVE_EXPORT_COPIES = _env_flag("SAVE_EXPORT_COPIES", True)

# --- Dates ---
# Empty means "use the machine's local zone".
LOCAL_TIMEZONE = os.getenv("LOCAL_TIMEZONE", "")
TRANSACTION_DATE_FORMAT = os.getenv("TRANSACTION_DATE_FORMAT", "%c")

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
