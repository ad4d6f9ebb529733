"""Configuration module using pydantic-settings."""

import logging
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class GeminiConfig(BaseSettings):
    """Google Gemini API configuration."""

    # Empty key is allowed at startup; submissions fail on the first call
    api_key: str = Field("", description="Gemini API key")
    image_model: str = Field(
        "gemini-2.5-flash-image",
        description="Model used for the nursery image",
    )
    text_model: str = Field(
        "gemini-2.5-flash",
        description="Model used for decoration tips and essentials",
    )
    timeout: int = Field(120, ge=1, description="Request timeout in seconds")

    model_config = SettingsConfigDict(env_prefix="GEMINI_", case_sensitive=False)


class TelegramConfig(BaseSettings):
    """Telegram bot configuration."""

    # Checked at bot start so the designer can run without Telegram
    bot_token: str = Field("", description="Telegram bot token")

    model_config = SettingsConfigDict(env_prefix="TELEGRAM_", case_sensitive=False)


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    level: str = Field("INFO", description="Logging level")
    format: str = Field("text", description="Log format (text or json)")

    model_config = SettingsConfigDict(env_prefix="LOG_", case_sensitive=False)


class SessionConfig(BaseSettings):
    """Per-chat designer session limits."""

    max_sessions: int = Field(1000, ge=1, description="Designers kept in memory")
    idle_ttl: int = Field(3600, ge=1, description="Seconds before an idle designer is dropped")

    model_config = SettingsConfigDict(env_prefix="SESSION_", case_sensitive=False)


class AppConfig(BaseSettings):
    """Main application configuration."""

    gemini: GeminiConfig = Field(default_factory=GeminiConfig)
    telegram: TelegramConfig = Field(default_factory=TelegramConfig)
    sessions: SessionConfig = Field(default_factory=SessionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def from_yaml(cls, yaml_path: Path | str) -> "AppConfig":
        """Load configuration from YAML file.

        Sections missing from the file are still filled from environment
        variables with the matching prefix.
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        import yaml

        with yaml_path.open("r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config_data: dict[str, Any] = {}
        if "gemini" in yaml_data:
            # GeminiConfig still picks GEMINI_API_KEY from env when absent here
            config_data["gemini"] = GeminiConfig(**yaml_data["gemini"])
        if "telegram" in yaml_data:
            config_data["telegram"] = TelegramConfig(**yaml_data["telegram"])
        if "sessions" in yaml_data:
            config_data["sessions"] = SessionConfig(**yaml_data["sessions"])
        if "logging" in yaml_data:
            config_data["logging"] = LoggingConfig(**yaml_data["logging"])

        return cls(**config_data)


# Global config instance
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get application configuration (singleton)."""
    global _config
    if _config is None:
        config_path = Path("config.yaml")
        try:
            if config_path.exists():
                _config = AppConfig.from_yaml(config_path)
            else:
                _config = AppConfig()
        except Exception as e:
            logger.warning(f"Failed to load from YAML, using env only: {e}")
            _config = AppConfig()
        logger.info("Configuration loaded successfully")
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config
    _config = None
