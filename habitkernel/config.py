from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Persistence collaborator: "file" | "sql" | "memory"
    storage_backend: str = "file"
    storage_path: str = "data/habits.json"
    database_url: str = "sqlite:///data/habits.db"
    storage_key: str = "habits"
    save_retries: int = 1  # extra attempts after a failed save

    default_tz: str = "UTC"
    habit_api_key: str | None = None

    # Analytics
    streak_lookback_days: int = 365
    recent_days: int = 7  # Day window shown next to each habit

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
