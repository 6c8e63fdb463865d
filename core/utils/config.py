from pydantic_settings import BaseSettings


class NotificationSettings(BaseSettings):
    ENABLE_NOTIFICATION_SCHEDULER: bool = False
    NOTIFICATION_CHECK_INTERVAL_MINUTES: int = 60
    NOTIFICATION_INITIAL_DELAY_SECONDS: int = 60
    DEFAULT_BUDGET_THRESHOLD: int = 80
    DEFAULT_REMINDER_DAYS_BEFORE: int = 3
    DB_STATEMENT_TIMEOUT_MS: int = 5000
    DJANGO_ENV: str = "development"

    class Config:
        env_file = ".env"
        extra = "allow"

    @property
    def scheduler_enabled(self) -> bool:
        """Production always runs the trigger; other environments opt in."""
        return self.DJANGO_ENV == "production" or self.ENABLE_NOTIFICATION_SCHEDULER


def get_setting():
    return NotificationSettings()
