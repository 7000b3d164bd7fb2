"""
UPS shipping client configuration

Values come from the environment or a local .env file.
Explicit constructor arguments on the Shipping facade always win.
"""
import logging
from typing import Optional

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# UPS XML API base URLs
UPS_PRODUCTION_URL = "https://onlinetools.ups.com/ups.app/xml"
UPS_INTEGRATION_URL = "https://wwwcie.ups.com/ups.app/xml"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    ENVIRONMENT: str = "production"

    # UPS XML access credentials
    UPS_ACCESS_KEY: str = ""
    UPS_USER_ID: str = ""
    UPS_PASSWORD: str = ""

    # Use the Customer Integration Environment instead of production
    UPS_USE_INTEGRATION: bool = False
    UPS_PRODUCTION_URL: str = UPS_PRODUCTION_URL
    UPS_INTEGRATION_URL: str = UPS_INTEGRATION_URL

    UPS_REQUEST_TIMEOUT: float = 30.0

    # Echoed back by UPS in TransactionReference/CustomerContext
    UPS_CUSTOMER_CONTEXT: str = ""

    @field_validator("UPS_PRODUCTION_URL", "UPS_INTEGRATION_URL", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v):
        if isinstance(v, str):
            return v.strip().rstrip("/")
        return v

    @field_validator("UPS_REQUEST_TIMEOUT")
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("UPS_REQUEST_TIMEOUT must be positive")
        return v

    @model_validator(mode="after")
    def validate_production_config(self):
        """Catch insecure endpoint configuration in production."""
        if self.ENVIRONMENT == "production":
            errors = []
            for name in ("UPS_PRODUCTION_URL", "UPS_INTEGRATION_URL"):
                if not getattr(self, name).startswith("https://"):
                    errors.append(f"{name} must use https:// in production")

            missing = [
                name for name in ("UPS_ACCESS_KEY", "UPS_USER_ID", "UPS_PASSWORD")
                if not getattr(self, name)
            ]
            if missing:
                logger.warning(
                    "UPS credentials not configured in production:\n" +
                    "\n".join(f"  - {name}" for name in missing)
                )

            if errors:
                raise ValueError(
                    "PRODUCTION CONFIGURATION VIOLATIONS:\n" + "\n".join(f"  - {e}" for e in errors)
                )

        return self

    def get_base_url(self, use_integration: Optional[bool] = None) -> str:
        """Production or integration base URL; UPS_USE_INTEGRATION when not given."""
        if use_integration is None:
            use_integration = self.UPS_USE_INTEGRATION
        return self.UPS_INTEGRATION_URL if use_integration else self.UPS_PRODUCTION_URL


settings = Settings()
