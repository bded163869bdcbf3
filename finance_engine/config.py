"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "finance-engine"
    log_level: str = "INFO"

    # Display
    currency: str = "MXN"
    locale: str = "es_MX"
    min_fraction_digits: int = 0
    max_fraction_digits: int = 2

    # Anomaly detection
    duplicate_window_days: int = 2
    unusual_fee_threshold_cents: int = 50_000  # $500
    spike_multiplier: int = 3
    spike_min_samples: int = 5

    # Recommendations
    top_category_threshold_pct: float = 40.0
    low_savings_rate_pct: float = 20.0
    recent_transactions_limit: int = 10


settings = Settings()
