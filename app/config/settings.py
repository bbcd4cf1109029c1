from pydantic_settings import BaseSettings
from dotenv import load_dotenv, find_dotenv
from os import getenv
from typing import Optional

_env_path = find_dotenv(usecwd=True)  # locate a .env file in this folder or parent folders
if _env_path:
    load_dotenv(_env_path)


class Settings(BaseSettings):
    # Database related
    # When the postgres credentials are all present they win over DATABASE_URL.
    DB_HOST_IP: Optional[str] = getenv('DB_HOST_IP')
    DB_USER: Optional[str] = getenv('DB_USER')
    DB_PASSWORD: Optional[str] = getenv('DB_PASSWORD')
    DB_NAME: Optional[str] = getenv('DB_NAME')
    DATABASE_URL: str = getenv('DATABASE_URL', 'sqlite:///./manacity.db')

    # Cache related (milliseconds)
    CACHE_DEFAULT_TTL_MS: int = 60_000
    LIST_CACHE_TTL_MS: int = 30_000

    LOG_LEVEL: str = 'INFO'

    @property
    def sqlalchemy_url(self) -> str:
        if self.DB_HOST_IP and self.DB_USER and self.DB_PASSWORD and self.DB_NAME:
            return f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST_IP}:5432/{self.DB_NAME}"
        return self.DATABASE_URL


settings = Settings()
