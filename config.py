import logging
import sys
from typing import Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings

from utils.credentials import decode_service_account

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    app_name: str = "LoanLink API"
    service_name: str = "loanlink-backend"
    debug: bool = False
    log_level: str = "INFO"
    port: int = 4000

    stripe_secret_key: str
    mongodb_uri: str
    database_name: str = "loanlink"
    firebase_service_account_key: Optional[str] = None

    # Base URL of the frontend that checkout redirects back to
    public_app_origin: str = "http://localhost:5173"
    cors_origins: str = "*"

    application_fee_cents: int = 1000
    application_fee_currency: str = "usd"
    application_fee_product_name: str = "Loan Application Fee"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("firebase_service_account_key")
    @classmethod
    def _check_service_account(cls, v: Optional[str]) -> Optional[str]:
        if v:
            decode_service_account(v)
        return v or None

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def firebase_enabled(self) -> bool:
        return bool(self.firebase_service_account_key)


def load_settings() -> Settings:
    """Load settings or exit the process when required variables are missing."""
    try:
        return Settings()
    except ValidationError as e:
        missing = [
            str(err["loc"][0]).upper()
            for err in e.errors()
            if err.get("type") == "missing" and err.get("loc")
        ]
        if missing:
            logger.error(
                "Missing required environment variables: %s. Check your .env file.",
                ", ".join(missing),
            )
        else:
            logger.error("Invalid configuration: %s", e)
        sys.exit(1)


settings = load_settings()
