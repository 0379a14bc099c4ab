"""
Centralized application settings

Values come from environment variables or a `.env` file in the backend
directory. A single module-level `settings` instance is shared by the app,
the CLI and the services.

Author: TM3
Date: 2025-10-17
"""
from decimal import Decimal
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).parent.parent.parent / '.env'


class Settings(BaseSettings):
    """Application configuration"""

    # API Settings
    API_TITLE: str = "Storefront Checkout API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Catalog, cart and checkout service"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # Runtime
    ENVIRONMENT: str = "development"
    LOG_LEVEL: Optional[str] = None
    SEED_SAMPLE_DATA: bool = True

    # Pricing
    SHIPPING_RATE_PER_KG: Decimal = Decimal("10")

    # Inventory
    LOW_STOCK_THRESHOLD: int = 5

    # CORS - comma-separated list, or "*"
    ALLOWED_ORIGINS: Optional[str] = "http://localhost:3000"

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        case_sensitive=True,
        extra="ignore",
    )

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        if not self.ALLOWED_ORIGINS:
            return ["http://localhost:3000"]
        if self.ALLOWED_ORIGINS.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    def get_log_level(self) -> str:
        """Explicit LOG_LEVEL wins, otherwise derive it from ENVIRONMENT"""
        if self.LOG_LEVEL:
            return self.LOG_LEVEL.upper()

        level_map = {
            "production": "INFO",
            "staging": "INFO",
            "development": "DEBUG",
            "test": "WARNING",
        }
        return level_map.get(self.ENVIRONMENT.lower(), "INFO")


settings = Settings()
