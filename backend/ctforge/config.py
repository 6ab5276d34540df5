# backend/ctforge/config.py
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App (reported to MongoDB as the client appname)
    app_name: str = "CTForge"

    # MongoDB
    mongodb_url: str = "mongodb://mongo:27017"
    mongodb_database: str = "ctforge"
    mongodb_timeout_ms: int = 5000  # serverSelectionTimeoutMS

    # Collection holding CTF scenario documents
    scenario_collection: str = "ctf_scenarios"

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()
