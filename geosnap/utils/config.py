from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///geosnap.db"
    JWT_SECRET: str = Field("dev-secret-key", description="JWT secret key")
    JWT_EXPIRES_MINUTES: int = 60 * 24 * 7
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
    ]
    LOG_LEVEL: str = "INFO"
    DEFAULT_PAGE_SIZE: int = 50

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
