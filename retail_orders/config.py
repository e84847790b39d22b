"""
Configuration settings for Retail Order Service
"""
from decimal import Decimal
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = "sqlite:///./retail_orders.db"
    DATABASE_ECHO: bool = False

    # Service
    SERVICE_NAME: str = "retail-order-service"
    SERVICE_PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8080"
    ]

    # Retry Configuration (store connectivity)
    MAX_RETRIES: int = 3
    RETRY_DELAY: int = 1

    # Identity sequences
    SEQUENCE_START: int = 1001

    # Dates: two-digit years below the pivot are 20xx, the rest 19xx
    TWO_DIGIT_YEAR_PIVOT: int = 50

    # Collections uncollected this many days past the reference date are swept
    COLLECTION_GRACE_DAYS: int = 8

    # Report thresholds (strictly greater than)
    TOP_SELLER_THRESHOLD: Decimal = Decimal("20000")
    TOP_PERFORMER_THRESHOLD: Decimal = Decimal("50000")
    REWARD_SALES_THRESHOLD: Decimal = Decimal("30000")

    class Config:
        env_file = ".env"
        case_sensitive = True


# Create global settings instance
settings = Settings()
