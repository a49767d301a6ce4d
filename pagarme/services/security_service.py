"""
Security service binding card encryption to a connected client.
"""

import asyncio
import logging
from typing import Any

from ..security import encrypt_card, encrypt_card_number
from ..utils.formatters import mask_card_number
from ..utils.validators import validate_card
from .transaction_service import TransactionService

logger = logging.getLogger(__name__)


class SecurityService:
    """
    Service for card hash generation.

    The public key comes from the card hash key endpoint, so any client
    connected with an api key or an encryption key can encrypt cards.
    """

    def __init__(self, transaction_service: TransactionService):
        self.transaction_service = transaction_service

    async def encrypt(self, card: Any, validate: bool = True) -> str:
        """
        Encrypt a card into a card hash.

        The card hash key request runs in a worker thread while the card is
        serialized. Under session auth the session is opened on the calling
        thread first; if the API then rejects it, on_expire is called from
        the worker thread.

        Args:
            card: CardRecord or mapping with card_number, card_holder_name,
                card_expiration_date and card_cvv
            validate: Reject invalid cards before requesting a key

        Returns:
            Card hash to send as card_hash on transaction requests

        Raises:
            InvalidCardError: If validate is set and the card is invalid
            TransactionError: If the card hash key cannot be fetched
            EncryptionError: If the card cannot be encrypted
        """
        if validate:
            card = validate_card(card)
            logger.info(f"Encrypting card: {mask_card_number(card.card_number)}")

        self.transaction_service.auth_service.get_auth_params()

        key = asyncio.to_thread(self.transaction_service.card_hash_key)
        return await encrypt_card(key, card)

    def encrypt_card_number(self, key_descriptor: Any, card_number: Any) -> str:
        """Encrypt a standalone card number (RSA-OAEP, PKCS#8 key)."""
        return encrypt_card_number(key_descriptor, card_number)
