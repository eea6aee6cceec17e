"""
Configuration Management

Centralized configuration using Pydantic Settings.
All settings loaded from environment variables (prefix URLSIGN_) or .env,
with sensible defaults.
"""
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_prefix="URLSIGN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # ============================================================
    # Signing defaults (used by the CLI when arguments are omitted)
    # ============================================================
    key_id: Optional[str] = Field(None, description="Default keyid for signed URLs")
    private_key_path: Optional[str] = Field(None, description="Path to the Ed25519 PEM private key")
    signing_mode: str = Field("legacy", description="Signing protocol: legacy or canonical")
    
    # ============================================================
    # Verification
    # ============================================================
    keys_config: Optional[str] = Field(
        None,
        description="Path to keys.yaml (defaults to config dir lookup)"
    )
    
    # ============================================================
    # Logging
    # ============================================================
    log_level: str = Field("INFO", description="Logging level")
    log_format: str = Field(
        "%(asctime)s - %(levelname)s - %(message)s",
        description="Log format string"
    )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton).
    
    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings():
    """Reload settings from environment (useful for testing)."""
    global _settings
    _settings = Settings()
    return _settings
