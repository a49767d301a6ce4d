"""
Entry point for talking to the Pagar.me API.

    from pagarme.client import connect

    client = connect({'api_key': 'ak_test_...'})
    transaction = client.transactions.get(123)
    card_hash = await client.security.encrypt(card)
"""

import logging
from typing import Callable, Dict, Optional

from .config import config
from .constants import AuthStrategy
from .services import AuthService, PostbackService, SecurityService, TransactionService
from .utils.http_client import HTTPClient

logger = logging.getLogger(__name__)


class Client:
    """
    A connected client. Services share one HTTP session and one set of
    credentials.
    """

    def __init__(self, auth_service: AuthService):
        self.auth_service = auth_service
        self.http_client = auth_service.http_client
        self.transactions = TransactionService(auth_service, self.http_client)
        self.security = SecurityService(self.transactions)
        self.postback = PostbackService(auth_service.api_key)

    def close(self):
        """Close the underlying HTTP session."""
        self.http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


def connect(
    auth: Optional[Dict[str, str]] = None,
    on_expire: Optional[Callable[[], None]] = None,
    http_client: Optional[HTTPClient] = None
) -> Client:
    """
    Connect to the Pagar.me API.

    Args:
        auth: One of {'api_key': ...}, {'encryption_key': ...} or
            {'email': ..., 'password': ...}. Defaults to the keys in
            Django settings.
        on_expire: Called when the API rejects the session (session auth only)
        http_client: HTTP client to use instead of a new one

    Returns:
        Connected Client

    Raises:
        ConfigurationError: If no usable credentials are given
        AuthenticationError: If the session cannot be opened
    """
    http_client = http_client or HTTPClient(config.api_base_url, timeout=config.timeout)
    auth_service = AuthService(auth, on_expire=on_expire, http_client=http_client)

    if auth_service.strategy == AuthStrategy.SESSION:
        auth_service.create_session()

    logger.info(f"Connected to Pagar.me using {auth_service.strategy.value} auth")
    return Client(auth_service)
