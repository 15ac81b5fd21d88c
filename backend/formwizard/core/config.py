"""
Configuration management using Pydantic Settings
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# config.py is at: backend/formwizard/core/config.py
_current_file = Path(__file__).resolve()
_backend_dir = _current_file.parent.parent.parent
PROJECT_ROOT = _backend_dir.parent
ENV_FILE = PROJECT_ROOT / ".env"
if not ENV_FILE.exists():
    ENV_FILE = _backend_dir / ".env"
if ENV_FILE.exists():
    load_dotenv(ENV_FILE, override=True)

DEFAULT_TEMPLATES_DIR = PROJECT_ROOT / "frontend" / "templates"


class Settings(BaseSettings):
    """Application settings"""

    # Application
    app_name: str = "Form Wizard"
    app_env: str = Field(default="development", description="Application environment")
    api_host: str = Field(default="0.0.0.0", description="Listen host")
    api_port: int = Field(default=4005, ge=1, le=65535, description="Listen port")
    templates_dir: Optional[str] = Field(
        default=None,
        description="Directory holding the view templates (defaults to frontend/templates)"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="json",
        description="Log format: 'json' for structured logging, 'text' for plain text"
    )
    log_uvicorn_access: bool = Field(default=False, description="Enable Uvicorn access logging")
    log_module_levels: Optional[str] = Field(
        default=None,
        description='Module-specific log levels (JSON string, e.g., {"formwizard.api": "DEBUG"})'
    )
    log_file_enabled: bool = Field(default=False, description="Enable file logging")
    log_file_path: str = Field(
        default="logs/formwizard.log",
        description="Path to log file (relative to project root)"
    )
    log_file_retention: int = Field(
        default=30,
        ge=1,
        description="Number of days to keep log files"
    )

    # Features
    enable_metrics: bool = Field(default=True, description="Expose Prometheus metrics on /metrics")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept level names in any case"""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("log_format")
    @classmethod
    def normalize_log_format(cls, v: str) -> str:
        fmt = v.strip().lower()
        if fmt not in {"json", "text"}:
            raise ValueError(f"Unknown log format: {v}")
        return fmt

    @property
    def templates_path(self) -> Path:
        """Resolved template directory"""
        if not self.templates_dir:
            return DEFAULT_TEMPLATES_DIR
        path = Path(self.templates_dir)
        if not path.is_absolute():
            path = PROJECT_ROOT / path
        return path

    @property
    def log_file(self) -> Path:
        """Resolved log file path"""
        path = Path(self.log_file_path)
        if not path.is_absolute():
            path = PROJECT_ROOT / path
        return path

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
