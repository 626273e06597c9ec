"""Data models for configuration."""
from dataclasses import dataclass, field
from typing import List, Optional

from options_calculator.strategy.models import QuoteRow, StrategyInputs
from options_calculator.strategy.strategy_calculator import STRATEGY_NAMES


@dataclass
class FinMindCredentials:
    """FinMind market data API credentials."""
    api_token: str
    base_url: str = "https://api.finmindtrade.com/api/v4/data"
    dataset: str = "TaiwanFutOptTickInfo"

    def validate(self) -> tuple[bool, Optional[str]]:
        """Validate FinMind credentials.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not isinstance(self.api_token, str) or not self.api_token.strip():
            return False, "API token is required"
        if not isinstance(self.base_url, str) or not self.base_url.strip():
            return False, "Base URL is required"
        if not self.base_url.startswith(('http://', 'https://')):
            return False, "Base URL must start with http:// or https://"
        if not isinstance(self.dataset, str) or not self.dataset.strip():
            return False, "Dataset is required"
        return True, None


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str
    file_path: str

    def validate(self) -> tuple[bool, Optional[str]]:
        """Validate logging configuration.

        Returns:
            Tuple of (is_valid, error_message)
        """
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if not isinstance(self.level, str) or self.level.upper() not in valid_levels:
            return False, f"Log level must be one of {valid_levels}"
        if not isinstance(self.file_path, str) or not self.file_path.strip():
            return False, "Log file path is required"
        return True, None


@dataclass
class Config:
    """Main configuration for the options calculator."""
    quotes: List[QuoteRow]
    strategy_inputs: StrategyInputs
    logging_config: LoggingConfig
    finmind_credentials: Optional[FinMindCredentials] = None
    debounce_ms: int = 300  # Delay collapsing rapid edits into one recompute
    strategies: List[str] = field(default_factory=list)  # Empty means all

    def validate(self) -> tuple[bool, Optional[str]]:
        """Validate the entire configuration.

        Returns:
            Tuple of (is_valid, error_message)
        """
        # Validate quote rows
        seen_strikes = set()
        for row in self.quotes:
            is_valid, error = row.validate()
            if not is_valid:
                return False, f"Quote error: {error}"
            if row.strike in seen_strikes:
                return False, f"Duplicate strike {row.strike} in quotes"
            seen_strikes.add(row.strike)

        is_valid, error = self.strategy_inputs.validate()
        if not is_valid:
            return False, f"Strategy inputs error: {error}"

        for name in self.strategies:
            if name not in STRATEGY_NAMES:
                return False, f"Strategy '{name}' must be one of {STRATEGY_NAMES}"

        if not isinstance(self.debounce_ms, int):
            return False, "Debounce delay must be an integer"
        if self.debounce_ms < 0:
            return False, "Debounce delay cannot be negative"

        if self.finmind_credentials:
            is_valid, error = self.finmind_credentials.validate()
            if not is_valid:
                return False, f"FinMind credentials error: {error}"

        is_valid, error = self.logging_config.validate()
        if not is_valid:
            return False, f"Logging config error: {error}"

        return True, None
