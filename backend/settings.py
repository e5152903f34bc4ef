import os

# Basic settings helper to read environment configuration.


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


def _as_int(val: str | None, default: int) -> int:
    if val is None or not val.strip():
        return default
    try:
        return int(val)
    except ValueError:
        return default


def _as_float(val: str | None, default: float) -> float:
    if val is None or not val.strip():
        return default
    try:
        return float(val)
    except ValueError:
        return default


class Settings:
    def __init__(self) -> None:
        self.NATIONAL_211_API_URL: str = os.getenv(
            "NATIONAL_211_API_URL", "https://api.211.org/resources/v2"
        ).rstrip("/")
        self.NATIONAL_211_API_KEY: str = os.getenv("NATIONAL_211_API_KEY", "")
        self.NATIONAL_211_API_KEY_HEADER: str = os.getenv("NATIONAL_211_API_KEY_HEADER", "Api-Key")
        self.NATIONAL_211_SEARCH_METHOD: str = os.getenv("NATIONAL_211_SEARCH_METHOD", "GET").upper()
        self.NATIONAL_211_TIMEOUT_SECONDS: float = _as_float(os.getenv("NATIONAL_211_TIMEOUT_SECONDS"), 10.0)
        self.NATIONAL_211_SEARCH_RADIUS_MILES: int = _as_int(os.getenv("NATIONAL_211_SEARCH_RADIUS_MILES"), 25)
        self.NATIONAL_211_PAGE_SIZE: int = _as_int(os.getenv("NATIONAL_211_PAGE_SIZE"), 50)
        self.RESULTS_DEFAULT_TAKE: int = _as_int(os.getenv("RESULTS_DEFAULT_TAKE"), 20)
        self.ZIP_DATA_CSV: str | None = os.getenv("ZIP_DATA_CSV") or None
        self.LOG_UPSTREAM_REQUESTS: bool = _as_bool(os.getenv("LOG_UPSTREAM_REQUESTS"), False)


settings = Settings()
