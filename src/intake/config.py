from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Used for "now" when a request carries no context
    user_timezone: str = "UTC"

    # Strategy acceptance (strict >) and heuristic floor
    accept_threshold: float = 0.7
    heuristic_threshold: float = 0.3
    model_min_confidence: float = 0.3
    strategy_timeout_seconds: float = 10.0

    fallback_confidence: float = 0.3
    fallback_title_length: int = 100

    default_work_start: str = "09:00"
    default_work_end: str = "17:00"

    # Sentry error tracking
    sentry_dsn: str = ""
    sentry_environment: str = "production"

    log_level: str = "INFO"

    @property
    def has_sentry(self) -> bool:
        return bool(self.sentry_dsn)


settings = Settings()
