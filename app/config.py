"""
Service settings loaded from environment variables (or a local .env file).
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from app.models import TOP_PRODUCTS_LIMIT as DEFAULT_TOP_PRODUCTS


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    LOG_LEVEL: str = "INFO"

    # Scorecard
    TOP_PRODUCTS_LIMIT: int = DEFAULT_TOP_PRODUCTS

    # Sample dataset served by /api/v1/analysis/sample
    SAMPLE_SEED: int = 42
    SAMPLE_SELLERS: int = 5
    SAMPLE_PRODUCTS: int = 40
    SAMPLE_RECORDS: int = 300


settings = Settings()
