# src/config/settings.py

"""Central configuration for the buyback_tracker crawler."""

from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the buyback_tracker crawler."""

    # --- Vendor API ---
    API_ENDPOINT: str = "https://buybackboss.com/api.php"
    PRODUCT_GROUP: str = "apple-phone"
    SEED_PATH: tuple[str, ...] = ("apple", "iphone")

    # --- Crawling ---
    REQUEST_DELAY: float = 1.0          # Seconds before each child descent
    REQUEST_TIMEOUT: int = 10           # Seconds before a request times out
    MAX_DEPTH: int = 8                  # Longest attribute path walked

    # --- Extraction ---
    PRODUCT_FAMILY: str = "iPhone"
    KNOWN_CARRIERS: list[str] = [
        "AT&T",
        "T-Mobile",
        "Verizon",
        "Unlocked",
        "Other",
    ]
    CAPACITY_UNITS: tuple[str, ...] = ("GB", "TB")
    UNKNOWN_MODEL: str = "Unknown Model"
    UNKNOWN_CARRIER: str = "Unknown Carrier"
    TIMESTAMP_FORMAT: str = "%Y-%m-%d %H:%M:%S"

    # --- Ledger ---
    LEDGER_HEADER: list[str] = [
        "Timestamp",
        "Phone Model",
        "Carrier",
        "Storage",
        "Condition",
        "Price",
    ]
    LEDGER_PREFIX: str = "phone_prices"

    # --- Logging ---
    LOG_TO_CONSOLE: bool = True

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json, text/plain, */*",
        "Accept-Language": "en-US,en;q=0.9",
        "Content-Type": "application/json",
        "Origin": "https://buybackboss.com",
        "Referer": "https://buybackboss.com/",
    }

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    RESULTS_DIR: Path = BASE_DIR / "results"
    LOGS_DIR: Path = BASE_DIR / "logs"
