from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "expense-api"
    env: str = "development"
    log_level: str = "INFO"
    log_format: str = "json"

    default_user_id: str = "default-user"
    max_body_bytes: int = 1_000_000

    rate_limit_global: str = "100/minute"
    rate_limit_write: str = "30/minute"

    cors_origins: str = "http://localhost:5173"
    cors_allow_methods: str = "GET,POST,PUT,DELETE,OPTIONS"
    cors_allow_headers: str = "Content-Type"
    cors_max_age: int = 600

    model_config = SettingsConfigDict(env_file=".env", env_prefix="", extra="ignore")

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        if not self.default_user_id.strip():
            raise ValueError("DEFAULT_USER_ID must not be empty")
        if self.log_format.lower() not in {"json", "text"}:
            raise ValueError("LOG_FORMAT must be json or text")
        if self.max_body_bytes <= 0:
            raise ValueError("MAX_BODY_BYTES must be positive")
        if self.env.lower() == "production" and "*" in self.allowed_origins:
            raise ValueError("Wildcard CORS origin is not allowed in production")
        return self

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def allowed_methods(self) -> list[str]:
        return [
            m.strip().upper() for m in self.cors_allow_methods.split(",") if m.strip()
        ]

    @property
    def allowed_headers(self) -> list[str]:
        return [h.strip() for h in self.cors_allow_headers.split(",") if h.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
