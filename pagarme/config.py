"""
Configuration management for the Pagar.me client.
"""

from django.conf import settings
from .constants import DEFAULT_API_BASE_URL, DEFAULT_TIMEOUT
from .exceptions import ConfigurationError


class PagarmeConfig:
    """
    Configuration manager for Pagar.me API settings.
    Loads and validates settings from Django settings.
    """

    def __init__(self):
        self._validate_settings()

    @property
    def api_base_url(self):
        """Get Pagar.me API base URL."""
        return getattr(settings, 'PAGARME_API_BASE_URL', DEFAULT_API_BASE_URL)

    @property
    def api_key(self):
        """Get Pagar.me API key."""
        api_key = getattr(settings, 'PAGARME_API_KEY', '')
        if not api_key:
            raise ConfigurationError(
                "PAGARME_API_KEY is not configured in Django settings. "
                "Please add it to your settings.py or .env file."
            )
        return api_key

    @property
    def encryption_key(self):
        """Get Pagar.me encryption key (optional)."""
        return getattr(settings, 'PAGARME_ENCRYPTION_KEY', '')

    @property
    def timeout(self):
        """Get request timeout in seconds."""
        return getattr(settings, 'PAGARME_TIMEOUT', DEFAULT_TIMEOUT)

    @property
    def has_api_key(self):
        """Check if an API key is configured."""
        return bool(getattr(settings, 'PAGARME_API_KEY', ''))

    def default_auth(self):
        """
        Build the auth mapping used when `connect` gets none.

        The API key wins over the encryption key since it grants access to
        every endpoint.

        Raises:
            ConfigurationError: If neither key is configured
        """
        if self.has_api_key:
            return {'api_key': self.api_key}
        if self.encryption_key:
            return {'encryption_key': self.encryption_key}
        raise ConfigurationError(
            "No Pagar.me credentials configured. "
            "Set PAGARME_API_KEY or PAGARME_ENCRYPTION_KEY, or pass auth to connect()."
        )

    def _validate_settings(self):
        """
        Validate that required settings are present.
        Raises ConfigurationError if validation fails.
        """
        if not self.api_base_url:
            raise ConfigurationError("PAGARME_API_BASE_URL is not configured.")

        # Credentials are checked lazily in their property getters

    def get_full_url(self, endpoint):
        """
        Get full URL for an API endpoint.

        Args:
            endpoint: API endpoint path

        Returns:
            Full URL combining base URL and endpoint
        """
        base = self.api_base_url.rstrip('/')
        endpoint = endpoint.lstrip('/')
        return f"{base}/{endpoint}"


# Singleton instance
config = PagarmeConfig()
