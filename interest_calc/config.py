"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database (key/value settings store)
    database_url: str = "sqlite:///./interest_calc.db"

    # External Services
    rates_api_url: str = "https://api.coinbase.com/v2/exchange-rates"

    # Service
    service_name: str = "interest-calc"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Session defaults when nothing is stored yet
    default_amount: float = 100.0
    default_yearly_rate: float = 1.07  # +7% per year


settings = Settings()
