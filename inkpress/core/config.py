from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Inkpress API"
    DATABASE_URL: str = "sqlite:///./inkpress.db"
    SECRET_KEY: str = "supersecretkey_change_me_in_production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7 # 1 week

    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    # OpenAI
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    CLASSIFIER_TIMEOUT_SECONDS: float = Field(5.0, gt=0)
    EXCERPT_MAX_CHARS: int = 150

    # Moderation
    AUTO_APPROVE_MIN_SCORE: int = Field(80, ge=0, le=100)
    AUTO_APPROVE_ALLOW_FLAGGED: bool = False

    # Trending
    TRENDING_VIEW_WEIGHT: float = 0.7
    TRENDING_LIKE_WEIGHT: float = 1.5
    TRENDING_LIMIT: int = 6

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
