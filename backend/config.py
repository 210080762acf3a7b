"""Application configuration"""
import sys
from pathlib import Path
from pydantic_settings import BaseSettings


def get_data_directory() -> Path:
    """Get the appropriate data directory based on environment.

    - Development: ./data (relative to project)
    - Production (bundled app): ~/Library/Application Support/VisualContentGenerator/
    """
    if getattr(sys, 'frozen', False):
        return Path.home() / "Library" / "Application Support" / "VisualContentGenerator"
    return Path("data")


class Settings(BaseSettings):
    # API settings
    api_port: int = 8000
    api_host: str = "127.0.0.1"

    # Data paths - computed based on environment
    data_dir: Path = get_data_directory()

    # Content limits
    min_content_length: int = 1  # After stripping whitespace
    max_content_length: int = 50000

    # Pipeline limits
    max_approaches: int = 5
    max_suggestions: int = 6
    analysis_delay_seconds: float = 0.0  # Simulated processing delay for the rule-based path

    # LLM settings (optional extraction path; "rules" disables it)
    llm_provider: str = "rules"  # rules, openai, or ollama
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4-turbo-preview"
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.2:3b"
    llm_timeout: float = 30.0
    llm_temperature: float = 0.3

    # Analysis cache
    enable_response_caching: bool = True
    cache_ttl_seconds: int = 1800
    cache_max_entries: int = 100

    # Themes
    default_theme: str = "professional"

    class Config:
        env_file = ".env"

settings = Settings()

# Ensure data directories exist
settings.data_dir.mkdir(parents=True, exist_ok=True)
