"""
Huissier settings.

Sources, strongest first:
1. Process environment (including a loaded .env.<env> file)
2. config/<env>.yaml
3. config/default.yaml
4. Field defaults below
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[3]
CONFIG_DIR = PROJECT_ROOT / "config"

# ENV -> (dotenv file, YAML overlay)
ENVIRONMENT_FILES = {
    "production": (".env.production", "production.yaml"),
    "development": (".env.development", "development.yaml"),
    "test": (".env.test", "test.yaml"),
}

Commitment = Literal["processed", "confirmed", "finalized"]
FailurePolicy = Literal["log", "raise"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """
    Runtime configuration.

    Stream credentials and the challenge message are secrets: keep them
    in the environment, not in the YAML files.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Service
    APP_NAME: str = "Huissier"
    APP_VERSION: str = "0.1.0"
    ENV: str = "development"
    DEBUG: bool = False
    API_HOST: str = "0.0.0.0"
    API_PORT: int = Field(default=8000, ge=1024, le=65535)
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    # SPL Governance reads
    SOLANA_RPC_URL: str = Field(..., description="Solana JSON-RPC endpoint")
    SOLANA_COMMITMENT: Commitment = "confirmed"
    LEDGER_TIMEOUT: float = Field(default=15.0, gt=0, description="Seconds per RPC")
    LEDGER_CONNECT_TIMEOUT: float = Field(default=5.0, gt=0)

    # Stream Chat
    STREAM_API_KEY: str = Field(..., description="Stream application key")
    STREAM_API_SECRET: str = Field(..., description="Stream application secret")
    STREAM_BASE_URL: str = "https://chat.stream-io-api.com"
    CHAT_TIMEOUT: float = Field(default=10.0, gt=0, description="Seconds per call")
    CHAT_CONNECT_TIMEOUT: float = Field(default=3.0, gt=0)
    CHAT_MULTI_TENANT_ENABLED: bool = Field(
        default=True,
        description="Switch on Stream multi-tenancy at startup",
    )

    # Authentication
    AUTH_MESSAGE: str = Field(
        ...,
        min_length=1,
        description="Challenge every wallet signs",
    )
    PROVISIONING_FAILURE_POLICY: FailurePolicy = Field(
        default="log",
        description="log: provisioning never blocks login; raise: it does",
    )

    LOG_LEVEL: LogLevel = "INFO"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def upper_log_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator("SOLANA_COMMITMENT", "PROVISIONING_FAILURE_POLICY", mode="before")
    @classmethod
    def lower_choice(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def load_config(
    config_file: Optional[str] = None,
    env_file: Optional[str] = None,
    env: Optional[str] = None,
) -> Settings:
    """
    Build Settings from YAML files and the environment.

    Args:
        config_file: YAML overlay in config/ (defaults to the ENV's file)
        env_file: dotenv file in the project root (defaults to .env.<env>)
        env: Environment name (defaults to $ENV, then "production")

    Returns:
        Validated Settings

    Raises:
        pydantic.ValidationError: If required values are missing or invalid
    """
    environment = env or os.getenv("ENV", "production")
    default_env_file, default_config_file = ENVIRONMENT_FILES.get(
        environment, ENVIRONMENT_FILES["production"]
    )

    dotenv_path = PROJECT_ROOT / (env_file or default_env_file)
    if dotenv_path.exists():
        load_dotenv(dotenv_path, override=True)

    values = _read_yaml(CONFIG_DIR / "default.yaml")
    values.update(_read_yaml(CONFIG_DIR / (config_file or default_config_file)))

    # Let BaseSettings pick these up from the environment instead
    overlay = {key: value for key, value in values.items() if key not in os.environ}
    return Settings(**overlay)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Process-wide settings, loaded on first use."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def override_settings(new_settings: Settings) -> None:
    """Replace the cached settings (tests)."""
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Drop the cached settings so the next call reloads them."""
    global _settings
    _settings = None
