"""Configuration management using Pydantic Settings"""

from typing import List, Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Record store
    store_backend: Literal["sql", "json", "memory"] = "sql"
    database_url: str = "sqlite:///./expenses.db"
    data_file_path: str = "data.json"

    # Expense policy
    allow_edit_paid: bool = True

    # Presentation
    currency_code: str = "EUR"
    currency_locale: str = "nl-BE"
    prefilled_names: List[str] = ["Martyna", "Joint", "Mama"]

    # Service
    service_name: str = "expense-tracker"
    log_level: str = "INFO"


settings = Settings()
