"""
config.py - Konfiguracja aplikacji przez zmienne środowiskowe.
Wszystkie zmienne mają prefiks OPCALC_.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict

from contracts import PrecedenceMode


class Settings(BaseSettings):
    # Evaluator
    precedence_mode: PrecedenceMode = PrecedenceMode.TIER
    max_nesting_depth: int = 250

    # Logging
    log_level: str = "INFO"

    # App
    app_title: str = "opcalc"
    app_version: str = "0.1.0"

    model_config = SettingsConfigDict(env_prefix="OPCALC_", env_file=".env", extra="ignore")
