"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic import Field
from pydantic_settings import BaseSettings
from typing import Optional


class FinanceConfig(BaseSettings):
    """Finance core configuration"""
    
    # Account configuration
    owner_label: str = "User1"
    initial_balance: str = "1000"  # Decimal as string
    
    # Auto-save configuration
    autosave_task_count: int = Field(2, ge=0)
    autosave_delay_seconds: float = Field(1.0, ge=0)
    
    # Finance server (single-shot listener) configuration
    listener_host: str = "127.0.0.1"
    listener_port: int = Field(5678, ge=0, le=65535)
    listener_timeout_seconds: float = Field(5.0, ge=0)
    listener_greeting: str = "Connected to Finance Server"
    
    # Form API configuration
    form_enabled: bool = True
    api_host: str = "127.0.0.1"
    api_port: int = 8090
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stderr
    
    class Config:
        env_prefix = "FINANCE_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = FinanceConfig()


def get_config() -> FinanceConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> FinanceConfig:
    """Reload configuration from environment"""
    global config
    config = FinanceConfig()
    return config
