from .api import ApiError, FinanceApiClient, calculate_summary
from .auth import InMemoryTokenStore, RefreshingTokenAuth, SessionExpiredError, TokenStore

__all__ = [
    "ApiError",
    "FinanceApiClient",
    "InMemoryTokenStore",
    "RefreshingTokenAuth",
    "SessionExpiredError",
    "TokenStore",
    "calculate_summary",
]
