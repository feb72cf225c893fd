"""Application configuration loaded from environment variables."""
import os
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Database location
    data_path: str = os.getenv("DATA_PATH", os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

    @property
    def db_path(self) -> str:
        return os.path.join(self.data_path, "trinity.db")

    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8083
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:8080", "capacitor://localhost"]

    # USDA FoodData Central
    usda_api_key: str = "DEMO_KEY"
    usda_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    usda_timeout: float = 10.0

    # Number of most recent records used for averages
    recent_window: int = 7

    class Config:
        env_prefix = "TRINITY_"


@lru_cache
def get_settings() -> Settings:
    return Settings()
