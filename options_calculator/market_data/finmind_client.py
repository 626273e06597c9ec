"""FinMind API client for raw option market data."""
from typing import Any, Dict, List, Optional

import requests

from options_calculator.logging.calc_logger import CalcLogger


class MarketDataError(Exception):
    """Raised when market data cannot be fetched or decoded."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class FinMindClient:
    """Client for fetching datasets from the FinMind API.

    Returns the raw records; mapping them onto quote rows is left to the
    caller.
    """

    def __init__(self, api_token: str, base_url: str, dataset: str,
                 logger: Optional[CalcLogger] = None, timeout: float = 10.0):
        """Initialize FinMind client.

        Args:
            api_token: FinMind API access token
            base_url: Data endpoint URL
            dataset: Default dataset name
            logger: Optional logger instance
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.dataset = dataset
        self.logger = logger
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            'Authorization': f'Bearer {api_token}',
            'Accept': 'application/json'
        })

    @classmethod
    def from_credentials(cls, credentials, logger: Optional[CalcLogger] = None) -> 'FinMindClient':
        """Create a client from FinMindCredentials."""
        return cls(
            api_token=credentials.api_token,
            base_url=credentials.base_url,
            dataset=credentials.dataset,
            logger=logger
        )

    def fetch_dataset(self, dataset: Optional[str] = None,
                      data_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """Fetch the records of a dataset.

        Args:
            dataset: Dataset name (default: the client's dataset)
            data_id: Optional instrument id filter

        Returns:
            List of raw record dictionaries

        Raises:
            MarketDataError: If the request fails or the response is malformed
        """
        params = {'dataset': dataset or self.dataset}
        if data_id:
            params['data_id'] = data_id

        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            if self.logger:
                self.logger.log_error(
                    "FinMind request failed",
                    e,
                    {"dataset": params['dataset'], "error_type": type(e).__name__}
                )
            raise MarketDataError(f"FinMind request failed: {str(e)}") from e

        if response.status_code != 200:
            error_msg = f"FinMind API error: {response.status_code} - {response.text}"
            if self.logger:
                self.logger.log_error(
                    error_msg,
                    None,
                    {"dataset": params['dataset'], "status_code": response.status_code}
                )
            raise MarketDataError(error_msg, status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            if self.logger:
                self.logger.log_error("FinMind returned invalid JSON", e, {"dataset": params['dataset']})
            raise MarketDataError("FinMind returned invalid JSON") from e

        data = payload.get('data') if isinstance(payload, dict) else None
        if not isinstance(data, list):
            message = payload.get('msg', 'missing data field') if isinstance(payload, dict) else 'unexpected payload'
            if self.logger:
                self.logger.log_error(f"Unexpected FinMind response: {message}", None,
                                      {"dataset": params['dataset']})
            raise MarketDataError(f"Unexpected FinMind response: {message}")

        if self.logger:
            self.logger.log_info(
                f"Fetched {len(data)} records from FinMind",
                {"dataset": params['dataset'], "records": len(data)}
            )

        return data
