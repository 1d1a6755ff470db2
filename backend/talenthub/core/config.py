from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+pysqlite:///./talenthub.db"
    environment: str = "development"

    log_level: str = "INFO"
    log_format: str = "text"

    # Identity provider. Without a secret the X-External-Id header is trusted as given.
    identity_token_secret: str | None = None
    identity_token_algorithm: str = "HS256"

    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    ai_enabled: bool = True
    ai_timeout_seconds: float = 10.0

    leaderboard_limit: int = 50
    points_update_retries: int = 5

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def ai_configured(self) -> bool:
        return self.ai_enabled and bool(self.openai_api_key)


@lru_cache
def get_settings() -> Settings:
    return Settings()
