"""Market data access."""
from .finmind_client import FinMindClient, MarketDataError

__all__ = ['FinMindClient', 'MarketDataError']
