"""Configuration manager for loading and validating configuration."""
import json
import os
import re
from typing import Any, Dict, List

from options_calculator.strategy.models import BidAsk, QuoteRow, StrategyInputs
from .models import Config, FinMindCredentials, LoggingConfig


class ConfigManager:
    """Manages loading and validation of configuration."""

    def __init__(self):
        """Initialize the ConfigManager."""
        self._config: Config = None

    def load_config(self, config_path: str) -> Config:
        """Load configuration from a JSON file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Config object with loaded configuration

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
            json.JSONDecodeError: If JSON is malformed
        """
        if not os.path.exists(config_path):
            raise FileNotFoundError(
                f"Configuration file not found: {config_path}\n"
                f"Please create a configuration file at this location."
            )

        try:
            with open(config_path, 'r') as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise json.JSONDecodeError(
                f"Invalid JSON format in configuration file: {e.msg}",
                e.doc,
                e.pos
            )

        config = self.build_config(config_data)

        # Validate configuration
        if not self.validate_config(config):
            raise ValueError("Configuration validation failed")

        self._config = config
        return config

    def build_config(self, config_data: Dict[str, Any]) -> Config:
        """Build a Config from already-parsed configuration data.

        Args:
            config_data: Parsed configuration dictionary

        Returns:
            Config object (not yet validated)

        Raises:
            ValueError: If a value has the wrong type
        """
        if not isinstance(config_data, dict):
            raise ValueError("Configuration must be a JSON object")

        # Substitute environment variables
        config_data = self._substitute_env_vars(config_data)

        finmind_credentials = None
        finmind_data = self._get_section(config_data, 'finmind')
        if finmind_data:
            finmind_credentials = FinMindCredentials(
                api_token=finmind_data.get('api_token', ''),
                base_url=finmind_data.get('base_url', 'https://api.finmindtrade.com/api/v4/data'),
                dataset=finmind_data.get('dataset', 'TaiwanFutOptTickInfo')
            )

        logging_data = self._get_section(config_data, 'logging')
        logging_config = LoggingConfig(
            level=logging_data.get('level', 'INFO'),
            file_path=logging_data.get('file_path', 'logs/options_calculator.log')
        )

        # Get nested strategy configs
        strategies = self._get_section(config_data, 'strategies')
        straddle_config = self._get_section(strategies, 'straddle', 'strategies.')
        strangle_config = self._get_section(strategies, 'strangle', 'strategies.')
        bull_call_config = self._get_section(strategies, 'bull_call_spread', 'strategies.')
        bear_put_config = self._get_section(strategies, 'bear_put_spread', 'strategies.')
        condor_config = self._get_section(strategies, 'iron_condor', 'strategies.')
        butterfly_config = self._get_section(strategies, 'butterfly', 'strategies.')

        # Create main config with type conversion error handling
        try:
            quotes = self._parse_quotes(config_data.get('quotes', []))
            strategy_inputs = StrategyInputs(
                # Straddle
                straddle_strike=float(straddle_config.get('strike', 22200)),
                # Strangle
                strangle_put_strike=float(strangle_config.get('put_strike', 22000)),
                strangle_call_strike=float(strangle_config.get('call_strike', 22400)),
                # Bull Call Spread
                bull_call_low_strike=float(bull_call_config.get('low_strike', 22200)),
                bull_call_high_strike=float(bull_call_config.get('high_strike', 22400)),
                # Bear Put Spread
                bear_put_high_strike=float(bear_put_config.get('high_strike', 22200)),
                bear_put_low_strike=float(bear_put_config.get('low_strike', 22000)),
                # Iron Condor
                condor_put_long_strike=float(condor_config.get('put_long_strike', 22000)),
                condor_put_short_strike=float(condor_config.get('put_short_strike', 22100)),
                condor_call_short_strike=float(condor_config.get('call_short_strike', 22300)),
                condor_call_long_strike=float(condor_config.get('call_long_strike', 22400)),
                # Butterfly
                butterfly_low_strike=float(butterfly_config.get('low_strike', 22000)),
                butterfly_mid_strike=float(butterfly_config.get('mid_strike', 22100)),
                butterfly_high_strike=float(butterfly_config.get('high_strike', 22200)),
            )
            config = Config(
                quotes=quotes,
                strategy_inputs=strategy_inputs,
                logging_config=logging_config,
                finmind_credentials=finmind_credentials,
                debounce_ms=int(config_data.get('debounce_ms', 300)),
                strategies=list(config_data.get('enabled_strategies', []))
            )
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            raise ValueError(
                f"Invalid configuration value type: {e}\n"
                f"Please check that numeric values are numbers and other values are correct types."
            )

        return config

    def _get_section(self, data: Dict[str, Any], key: str, prefix: str = '') -> Dict[str, Any]:
        """Get a nested configuration section, defaulting to empty.

        Raises:
            ValueError: If the section is present but not an object
        """
        section = data.get(key, {})
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ValueError(
                f"Configuration section '{prefix}{key}' must be an object, "
                f"got {type(section).__name__}"
            )
        return section

    def _parse_quotes(self, quote_data: List[Dict[str, Any]]) -> List[QuoteRow]:
        """Parse quote rows from configuration data.

        Each entry has a ``strike`` and nested ``call``/``put`` bid/ask pairs.
        Row ids are assigned in file order starting at 1.
        """
        rows = []
        for index, entry in enumerate(quote_data, start=1):
            call = entry.get('call', {})
            put = entry.get('put', {})
            rows.append(QuoteRow(
                id=index,
                strike=float(entry['strike']),
                call=BidAsk(bid=float(call.get('bid', 0)), ask=float(call.get('ask', 0))),
                put=BidAsk(bid=float(put.get('bid', 0)), ask=float(put.get('ask', 0))),
            ))
        return rows

    def _substitute_env_vars(self, data):
        """Recursively substitute environment variables in configuration data.

        Environment variables should be in the format ${VAR_NAME}.

        Args:
            data: Configuration data (dict, list, or string)

        Returns:
            Data with environment variables substituted
        """
        if isinstance(data, dict):
            return {key: self._substitute_env_vars(value) for key, value in data.items()}
        elif isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]
        elif isinstance(data, str):
            pattern = r'\$\{([^}]+)\}'
            result = data
            for var_name in re.findall(pattern, data):
                result = result.replace(f'${{{var_name}}}', os.environ.get(var_name, ''))
            return result
        else:
            return data

    def validate_config(self, config: Config) -> bool:
        """Validate the configuration.

        Args:
            config: Config object to validate

        Returns:
            True if valid

        Raises:
            ValueError: If validation fails with error message
        """
        is_valid, error_message = config.validate()
        if not is_valid:
            raise ValueError(f"Configuration validation error: {error_message}")
        return True

    def _require_config(self) -> Config:
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call load_config first.")
        return self._config

    def get_quotes(self) -> List[QuoteRow]:
        """Get the configured quote rows.

        Returns:
            List of QuoteRow objects
        """
        return self._require_config().quotes

    def get_strategy_inputs(self) -> StrategyInputs:
        """Get the strike selections for each strategy.

        Returns:
            StrategyInputs object
        """
        return self._require_config().strategy_inputs

    def get_debounce_ms(self) -> int:
        """Get the recompute debounce delay in milliseconds.

        Returns:
            Debounce delay
        """
        return self._require_config().debounce_ms

    def get_finmind_credentials(self) -> FinMindCredentials:
        """Get FinMind API credentials.

        Returns:
            FinMindCredentials object, or None if not configured
        """
        return self._require_config().finmind_credentials

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration.

        Returns:
            LoggingConfig object
        """
        return self._require_config().logging_config
