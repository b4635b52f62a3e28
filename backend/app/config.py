from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/skillgap.db"
    app_password: str = "changeme"
    secret_key: str = "dev-secret-key-change-in-production"
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    # Time estimation
    hours_per_week: int = 10
    # Used when a catalog skill has no hour cost for the target level
    default_level_hours: int = 20

    # Priority weighting per importance tier
    essential_weight: int = 3
    important_weight: int = 2
    nice_to_have_weight: int = 1

    # Dashboard summary
    top_careers_limit: int = 3

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()
