"""
Authentication service for the Pagar.me API.
Resolves the credentials sent with every request and manages sessions.
"""

import logging
from typing import Callable, Dict, Optional

from ..config import config
from ..constants import APIEndpoints, AuthStrategy
from ..exceptions import APIError, AuthenticationError, ConfigurationError
from ..utils.http_client import HTTPClient

logger = logging.getLogger(__name__)


class AuthService:
    """
    Service for Pagar.me credentials.

    Supports three strategies, picked from the keys of the auth mapping:
        - {'api_key': ...}
        - {'encryption_key': ...} (card hash key lookups only)
        - {'email': ..., 'password': ...} (dashboard session)

    Session ids are cached on the instance until the API rejects them.
    """

    def __init__(
        self,
        auth: Optional[Dict[str, str]] = None,
        on_expire: Optional[Callable[[], None]] = None,
        http_client: Optional[HTTPClient] = None
    ):
        self.auth = dict(auth) if auth is not None else config.default_auth()
        self.strategy = self._detect_strategy(self.auth)
        self.on_expire = on_expire
        self.http_client = http_client or HTTPClient(config.api_base_url, timeout=config.timeout)
        self._session_id = None

    @staticmethod
    def _detect_strategy(auth: Dict[str, str]) -> AuthStrategy:
        if auth.get('api_key'):
            return AuthStrategy.API_KEY
        if auth.get('encryption_key'):
            return AuthStrategy.ENCRYPTION_KEY
        if auth.get('email') and auth.get('password'):
            return AuthStrategy.SESSION
        raise ConfigurationError(
            "Unrecognized auth. Provide api_key, encryption_key, or email and password."
        )

    @property
    def api_key(self) -> Optional[str]:
        """API key used by this client, if any."""
        return self.auth.get('api_key')

    def create_session(self) -> str:
        """
        Open a new dashboard session with email and password.

        Returns:
            Session id

        Raises:
            AuthenticationError: If session creation fails
        """
        logger.info("Creating new Pagar.me session")

        try:
            response = self.http_client.post(
                endpoint=APIEndpoints.SESSIONS,
                data={
                    'email': self.auth['email'],
                    'password': self.auth['password'],
                }
            )
        except AuthenticationError:
            raise
        except APIError as e:
            logger.error(f"Failed to create session: {str(e)}")
            raise AuthenticationError(
                f"Session creation failed: {e.message}",
                error_code=e.error_code,
                response_data=e.response_data
            )

        session_id = response.get('session_id') if isinstance(response, dict) else None
        if not session_id:
            raise AuthenticationError(
                "Session creation failed: No session_id in response",
                response_data=response
            )

        self._session_id = session_id
        logger.info("Successfully created Pagar.me session")
        return session_id

    def get_session_id(self, force_refresh: bool = False) -> str:
        """
        Get the cached session id, creating a session when needed.

        Args:
            force_refresh: Open a new session even if one is cached
        """
        if force_refresh or not self._session_id:
            return self.create_session()

        logger.debug("Using cached session")
        return self._session_id

    def invalidate_session(self):
        """Forget the cached session id."""
        logger.info("Invalidating cached session")
        self._session_id = None

    def get_auth_params(self, force_refresh: bool = False) -> Dict[str, str]:
        """
        Get the credential parameters for an API request.

        Args:
            force_refresh: Open a new session (session auth only)

        Returns:
            Dictionary with api_key, encryption_key or session_id
        """
        if self.strategy == AuthStrategy.API_KEY:
            return {'api_key': self.auth['api_key']}
        if self.strategy == AuthStrategy.ENCRYPTION_KEY:
            return {'encryption_key': self.auth['encryption_key']}
        return {'session_id': self.get_session_id(force_refresh=force_refresh)}

    def handle_authentication_failure(self, error: AuthenticationError):
        """
        React to a rejected request.

        Under session auth the session has expired: it is dropped and the
        on_expire callback fires.
        """
        if self.strategy != AuthStrategy.SESSION:
            return

        logger.warning(f"Session rejected by the API: {error.message}")
        self.invalidate_session()
        if self.on_expire:
            self.on_expire()
