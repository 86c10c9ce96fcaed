from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Google Sheets sink
    sheet_id: str = ""
    google_service_account_email: str = ""
    google_private_key: str = ""
    orders_master_sheet: str = "ORDERS_MASTER"
    payments_status_sheet: str = "PAYMENTS_STATUS"

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "text"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False

    @field_validator("google_private_key")
    @classmethod
    def unescape_newlines(cls, v: str) -> str:
        # Hosting dashboards often store the PEM with literal "\n" sequences
        return v.replace("\\n", "\n")

    @property
    def sheets_configured(self) -> bool:
        return bool(self.sheet_id and self.google_service_account_email and self.google_private_key)


# Global settings instance
settings = Settings()
