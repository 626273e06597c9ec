"""Calculator logger with structured context and credential masking."""
import logging
import math
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

from options_calculator.config.models import LoggingConfig


class CalcLogger:
    """Logger for the options calculator with structured logging and credential protection."""

    # Patterns to detect and mask sensitive information
    SENSITIVE_PATTERNS = [
        (re.compile(r'(token["\']?\s*[:=]\s*["\']?)([^"\'}\s]+)', re.IGNORECASE), r'\1***MASKED***'),
        (re.compile(r'(password["\']?\s*[:=]\s*["\']?)([^"\'}\s]+)', re.IGNORECASE), r'\1***MASKED***'),
        (re.compile(r'(bearer\s+)([a-zA-Z0-9_\-\.]+)', re.IGNORECASE), r'\1***MASKED***'),
    ]

    SENSITIVE_KEYS = ['token', 'secret', 'password', 'authorization']

    def __init__(self, config: LoggingConfig):
        """Initialize the calculator logger.

        Args:
            config: Logging configuration
        """
        self.config = config
        self.logger = logging.getLogger('OptionsCalculator')
        level = getattr(logging, config.level.upper())
        self.logger.setLevel(level)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()

        formatter = logging.Formatter(
            '[%(asctime)s] [%(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        # Configure file handler with rotation
        log_path = Path(config.file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            config.file_path,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        self.logger.addHandler(file_handler)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

    def _mask_sensitive_data(self, message: str) -> str:
        """Mask sensitive information in log messages.

        Args:
            message: Original log message

        Returns:
            Message with sensitive data masked
        """
        masked_message = message
        for pattern, replacement in self.SENSITIVE_PATTERNS:
            masked_message = pattern.sub(replacement, masked_message)
        return masked_message

    def _format_context(self, context: Optional[Dict[str, Any]]) -> str:
        """Format context dictionary for logging.

        Args:
            context: Context dictionary

        Returns:
            Formatted context string
        """
        if not context:
            return ""

        context_parts = []
        for key, value in context.items():
            if any(sensitive in key.lower() for sensitive in self.SENSITIVE_KEYS):
                value = '***MASKED***'
            context_parts.append(f"{key}={value}")

        return " | " + " | ".join(context_parts)

    def log_info(self, message: str, context: Optional[Dict[str, Any]] = None):
        """Log an info message.

        Args:
            message: Log message
            context: Optional context dictionary for structured data
        """
        self.logger.info(f"{self._mask_sensitive_data(message)}{self._format_context(context)}")

    def log_warning(self, message: str, context: Optional[Dict[str, Any]] = None):
        """Log a warning message.

        Args:
            message: Log message
            context: Optional context dictionary for structured data
        """
        self.logger.warning(f"{self._mask_sensitive_data(message)}{self._format_context(context)}")

    def log_debug(self, message: str, context: Optional[Dict[str, Any]] = None):
        """Log a debug message.

        Args:
            message: Log message
            context: Optional context dictionary for structured data
        """
        self.logger.debug(f"{self._mask_sensitive_data(message)}{self._format_context(context)}")

    def log_error(self, message: str, error: Optional[Exception] = None,
                  context: Optional[Dict[str, Any]] = None):
        """Log an error message.

        Args:
            message: Log message
            error: Optional exception object
            context: Optional context dictionary for structured data
        """
        masked_message = self._mask_sensitive_data(message)
        context_str = self._format_context(context)

        if error:
            error_info = self._mask_sensitive_data(f" | Error: {type(error).__name__}: {str(error)}")
            self.logger.error(f"{masked_message}{context_str}{error_info}", exc_info=True)
        else:
            self.logger.error(f"{masked_message}{context_str}")

    def log_critical(self, message: str, error: Optional[Exception] = None,
                     context: Optional[Dict[str, Any]] = None):
        """Log a critical error message.

        Args:
            message: Log message
            error: Optional exception object
            context: Optional context dictionary for structured data
        """
        masked_message = self._mask_sensitive_data(message)
        context_str = self._format_context(context)

        if error:
            error_info = self._mask_sensitive_data(f" | Error: {type(error).__name__}: {str(error)}")
            self.logger.critical(f"{masked_message}{context_str}{error_info}", exc_info=True)
        else:
            self.logger.critical(f"{masked_message}{context_str}")

    def log_strategy_result(self, name: str, result):
        """Log the metrics of one calculated strategy.

        Args:
            name: Strategy name
            result: StrategyResult for the strategy
        """
        if result.credit is not None:
            premium = f"Credit={result.credit:.2f}"
        else:
            premium = f"Cost={result.cost:.2f}"

        if math.isinf(result.max_profit):
            max_profit = "Unlimited"
        else:
            max_profit = f"{result.max_profit:.2f}"

        message = (
            f"Strategy calculated: {name} | "
            f"{premium} | "
            f"Max Risk={result.max_risk:.2f} | "
            f"Max Profit={max_profit}"
        )

        points = result.breakeven_points
        if points:
            message += " | Breakeven=" + " / ".join(f"{p:.2f}" for p in points)

        self.log_debug(message)

    def log_calculation_summary(self, summary):
        """Log a calculation run summary.

        Args:
            summary: CalculationSummary of the run
        """
        message = (
            f"Calculation complete | "
            f"Date={summary.calculated_at} | "
            f"Total={len(summary.outcomes)} | "
            f"Success={summary.successful} | "
            f"Failed={summary.failed}"
        )
        self.log_info(message)

        for name, error_message in summary.errors.items():
            self.log_info(f"  - {name}: FAILED ({error_message})")
