from pydantic import Field, AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Read env from container + optionally from files
    model_config = SettingsConfigDict(
        env_file=(".env", ".env.docker"),
        extra="ignore",
        case_sensitive=False,
    )

    # App
    ENVIRONMENT: str = Field(default="dev", validation_alias=AliasChoices("ENVIRONMENT", "environment"))
    APP_NAME: str = Field(default="billbook", validation_alias=AliasChoices("APP_NAME", "app_name"))
    LOG_LEVEL: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))
    DEBUG: bool = Field(default=False, validation_alias=AliasChoices("DEBUG", "debug"))
    PORT: int = Field(default=8000, validation_alias=AliasChoices("PORT", "port"))

    # Document store
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./billbook.db",
        validation_alias=AliasChoices("DATABASE_URL", "database_url"),
    )

    # Identity (JWT bearer tokens)
    JWT_SECRET: str = Field(
        default="change-me-in-production",
        validation_alias=AliasChoices("JWT_SECRET", "jwt_secret"),
    )
    JWT_ALGORITHM: str = Field(default="HS256", validation_alias=AliasChoices("JWT_ALGORITHM", "jwt_algorithm"))
    JWT_ACCESS_EXPIRE_MINUTES: int = Field(
        default=60 * 24,
        validation_alias=AliasChoices("JWT_ACCESS_EXPIRE_MINUTES", "jwt_access_expire_minutes"),
    )

    # Numbering
    DEFAULT_INVOICE_PREFIX: str = Field(
        default="XUSE",
        validation_alias=AliasChoices("DEFAULT_INVOICE_PREFIX", "default_invoice_prefix"),
    )


settings = Settings()
