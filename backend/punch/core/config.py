from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    DATABASE_URL: str = "sqlite+aiosqlite:///./punch.db"
    DB_POOL_SIZE: int = 3

    # IANA zone used to allocate work intervals to days and weeks
    TIMEZONE: str = "UTC"

    DEFAULT_PROJECT_NAME: str = "Project"
    DEFAULT_OVERHEAD_MINUTES: int = 15

    REPORT_WEEKS_IN_PAST: int = 5
    REPORT_MAX_EVENTS: int = 10

    LOG_LEVEL: str = "INFO"
    RUN_MIGRATIONS_ON_STARTUP: bool = True


settings = Settings()
