"""
This module contains configuration settings for the application.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration using Pydantic BaseSettings.
    Automatically handles environment variable parsing and type conversion.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application settings
    app_name: str = "Forecast Chart"
    app_version: str = "1.0.0"
    log_level: str = "INFO"

    # Open-Meteo settings
    geocoding_api_url: str = "https://geocoding-api.open-meteo.com/v1/search"
    forecast_api_url: str = "https://api.open-meteo.com/v1/forecast"
    api_timeout: int = 10
    geocoding_language: str = "es"
    geocoding_result_count: int = 1
    hourly_variable: str = "temperature_2m"
    forecast_timezone: str = "auto"

    # Chart settings
    hot_threshold: float = 30
    cold_threshold: float = 10
    hot_color: str = "#ff4d4d"
    cold_color: str = "#2e86de"
    neutral_color: str = "#4b5563"
    max_x_ticks: int = 10
    canvas_id: str = "weatherChart"

    # Pipeline settings
    not_found_message: str = "City not found. Try another name."
    default_error_message: str = "An error occurred while fetching the data."
    discard_stale_searches: bool = True
    max_sessions: int = 200

    # CORS settings
    cors_origins: List[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: List[str] = ["*"]
    cors_allow_headers: List[str] = ["*"]


@lru_cache()
def get_settings() -> Settings:
    """
    Get the application settings.
    """
    return Settings()
