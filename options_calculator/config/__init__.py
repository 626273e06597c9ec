"""Configuration management module."""
from .models import Config, FinMindCredentials, LoggingConfig
from .config_manager import ConfigManager

__all__ = ['Config', 'FinMindCredentials', 'LoggingConfig', 'ConfigManager']
