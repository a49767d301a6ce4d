"""
Postback service for verifying Pagar.me callbacks.
"""

import logging
from typing import Optional, Union

from ..config import config
from ..utils.signature import calculate_signature, verify_signature

logger = logging.getLogger(__name__)


class PostbackService:
    """
    Service for postback signatures, bound to an API key.
    Falls back to PAGARME_API_KEY when the client has none.
    """

    def __init__(self, api_key: Optional[str] = None):
        self._api_key = api_key

    @property
    def api_key(self) -> str:
        return self._api_key or config.api_key

    def calculate_signature(self, body: Union[str, bytes]) -> str:
        """Calculate the expected signature for a postback body."""
        return calculate_signature(self.api_key, body)

    def verify_signature(self, body: Union[str, bytes], signature: str) -> bool:
        """
        Verify the X-Hub-Signature header of a postback.

        Args:
            body: Raw request body
            signature: Header value (e.g., "sha1=...")

        Returns:
            True if the postback was signed with this client's API key
        """
        valid = verify_signature(self.api_key, body, signature)
        if not valid:
            logger.warning("Postback signature verification failed")
        return valid
