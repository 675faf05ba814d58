"""Configuration management using Pydantic Settings"""

from typing import Dict

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./payplus_roi.db"

    # Service
    service_name: str = "payplus-roi"
    log_level: str = "INFO"

    # Currency: units of each currency per 1 USD
    exchange_rates: Dict[str, float] = {"USD": 1.00, "GBP": 0.79, "EUR": 0.92}
    currency_symbols: Dict[str, str] = {"USD": "$", "GBP": "£", "EUR": "€"}
    default_currency_symbol: str = "$"

    # Calculation
    distribution_tolerance: float = 0.01

    # Saved calculations
    max_saved_calculations: int = 10
    storage_version: str = "1.0.0"


settings = Settings()
