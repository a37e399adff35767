from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "GameStore"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./gamestore.db"

    # Insert the sample catalog on startup (games already present are skipped)
    seed_sample_catalog: bool = False


settings = Settings()


# =============================================================================
# DOMAIN LIMITS
# =============================================================================

# Age rating bounds for catalog entries (inclusive)
MIN_AGE_RATING = 0
MAX_AGE_RATING = 18

# Customer age bounds (inclusive)
MIN_CUSTOMER_AGE = 0
MAX_CUSTOMER_AGE = 150

# Upper bound used when a price range filter omits its maximum
DEFAULT_MAX_PRICE = Decimal("9999.99")

# Monetary values are kept at cent precision
MONEY_QUANTUM = Decimal("0.01")

# Largest amount a Numeric(10, 2) money column can hold
MAX_MONEY_AMOUNT = Decimal("99999999.99")
