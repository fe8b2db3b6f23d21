from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Project ---
    PROJECT_NAME: str = "Field_Sales_Ledger"
    LOG_LEVEL: str = "INFO"

    # --- Database ---
    DATABASE_URL: str = "sqlite:///./field_sales.db"
    SQL_ECHO: bool = False
    DB_CONNECT_RETRIES: int = 10
    DB_CONNECT_WAIT_SECONDS: int = 3
    SEED_ON_STARTUP: bool = True

    # --- Business ---
    TIMEZONE: str = "Asia/Karachi"
    ORDER_NO_PREFIX: str = "ORD"
    RECENT_ACTIVITY_LIMIT: int = 10

    # --- Validation rules (price/qty were never range-checked upstream) ---
    REQUIRE_POSITIVE_QUANTITY: bool = True
    REQUIRE_NON_NEGATIVE_PRICE: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"  # Unknown variables in .env are ignored instead of crashing
    )

settings = Settings()
