"""Application settings using Pydantic Settings."""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # OpenAI Configuration
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    # Anthropic Configuration (Optional fallback)
    anthropic_api_key: str = ""

    # Storage Configuration: "memory" or "mongo"
    storage_backend: str = "memory"
    mongodb_url: str = "mongodb://localhost:27017/holistic_planner"
    memory_store_max_records: int = 0  # 0 means unbounded

    # Plan generation
    generation_timeout_seconds: float = 120.0
    serialize_plan_generation: bool = True

    # Application Configuration
    app_name: str = "Holistic Planner"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS Configuration
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
