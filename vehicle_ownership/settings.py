# vehicle_ownership/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator, model_validator
import os


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_parse_complex_value=False)

    app_env: str = os.getenv("APP_ENV", "development")
    database_url: str | None = os.getenv("DATABASE_URL")  # no default: a missing URL must fail loudly
    allowed_origins: list[str] | str = Field(default_factory=lambda: ["*"])
    accepted_document_type: str = os.getenv("ACCEPTED_DOCUMENT_TYPE", "CC")
    registry_latency_enabled: bool = True
    registry_latency_min_seconds: float = 1.5
    registry_latency_max_seconds: float = 2.5
    reconciliation_timeout_seconds: float = 15.0
    registry_backend: str = os.getenv("REGISTRY_BACKEND", "database")  # "database" or "http"
    runt_api_url: str = os.getenv("RUNT_API_URL", "")
    runt_api_timeout: float = 10.0

    @field_validator("registry_backend", mode="after")
    @classmethod
    def _check_registry_backend(cls, value: str) -> str:
        normalized = (value or "database").strip().lower()
        if normalized not in {"database", "http"}:
            raise ValueError("registry_backend must be 'database' or 'http'")
        return normalized

    @field_validator("allowed_origins", mode="after")
    @classmethod
    def _parse_allowed_origins(cls, value):
        """
        Accept comma-separated strings (common in .env files) in addition to JSON arrays.
        Defaults to wildcard (*) when empty.
        """
        if value is None or value == "":
            return ["*"]
        if isinstance(value, str):
            parsed = [part.strip() for part in value.split(",") if part.strip()]
            return parsed or ["*"]
        if isinstance(value, (list, tuple, set)):
            parsed = [str(part).strip() for part in value if str(part).strip()]
            return parsed or ["*"]
        return value

    @field_validator("accepted_document_type", mode="after")
    @classmethod
    def _upper_document_type(cls, value: str) -> str:
        return (value or "CC").strip().upper()

    @model_validator(mode="after")
    def _check_latency_window(self):
        if self.registry_latency_min_seconds < 0:
            raise ValueError("registry_latency_min_seconds must be >= 0")
        if self.registry_latency_max_seconds < self.registry_latency_min_seconds:
            raise ValueError("registry_latency_max_seconds must be >= registry_latency_min_seconds")
        return self


settings = Settings()

# Normalise DATABASE_URL (must be present)
if not settings.database_url:
    raise RuntimeError("Missing env DATABASE_URL")

url = settings.database_url
if url.startswith("postgres://"):
    url = url.replace("postgres://", "postgresql://", 1)

# Only enforce sslmode for Postgres connections; sqlite/local URLs do not support it
if url.split(":", 1)[0].startswith("postgres") and "sslmode=" not in url:
    url += ("&" if "?" in url else "?") + "sslmode=require"

settings.database_url = url
