from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    DATA_DIR, DB_FILENAME, ACCESS_KEY, CURRENCY_API_BASE_URL).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Order Service"
    debug: bool = False
    version: str = "0.1.0"

    # Data & persistence
    data_dir: Path = Path("data")
    db_filename: str = "orders.sqlite3"
    db_path: Optional[Path] = None  # derived if not provided

    # Quote provider (apilayer currency layer)
    access_key: str
    currency_api_base_url: str = "http://apilayer.net/api"
    http_timeout_seconds: float = 5.0

    def init_post_load(self) -> None:
        """Finalize derived fields and ensure directories exist."""
        if not self.access_key.strip():
            raise ValueError("access_key must not be blank")
        if self.db_path is None:
            self.db_path = self.data_dir / self.db_filename
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
