from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    DATABASE_URL: str = "postgresql+asyncpg://workforce:workforce_secret@db:5432/workforce"

    # Local calendar used for day bucketing and lateness checks
    TIMEZONE: str = "Asia/Bangkok"
    # "th" or "en" short weekday names on chart axes
    DAY_LABEL_LOCALE: str = "th"

    # Fallback lateness policy when work_time_config has no row
    CHECK_IN_HOUR: int = 9
    CHECK_IN_MINUTE: int = 0
    LATE_GRACE_MINUTES: int = 15

    DEFAULT_RANGE_DAYS: int = 7
    MAX_RANGE_DAYS: int = 366

    RUN_MIGRATIONS_ON_STARTUP: bool = False
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.TIMEZONE)


settings = Settings()
