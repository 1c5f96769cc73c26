from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be configured via .env file or environment variables.
    """

    # Database
    DATABASE_URL: str
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    # JWT Authentication
    SECRET_KEY: str

    # Application
    APP_NAME: str = "Household Hub API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: str = ""
    CORS_ALLOW_CREDENTIALS: bool = True

    # Access control
    ALLOWED_EMAILS: str = ""

    # Profiles
    DEFAULT_PROFILE_COLOR: str = "#3b82f6"

    # Backup
    BACKUP_FILENAME_PREFIX: str = "hub-backup"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS from comma-separated string"""
        if not self.CORS_ORIGINS:
            return []
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def allowed_emails_list(self) -> list[str]:
        """Parse ALLOWED_EMAILS into lowercase addresses (empty means everyone)"""
        if not self.ALLOWED_EMAILS:
            return []
        return [email.strip().lower() for email in self.ALLOWED_EMAILS.split(",") if email.strip()]


# Global settings instance
settings = Settings()
