"""
Card hash encryption.

A card hash stands in for raw card data on requests to the Pagar.me API.
It is built by serializing the card into a query string, encrypting it
with the public key the API hands out through the card hash key endpoint,
and prefixing the result with that key's id:

    <key id>_<base64 RSA ciphertext>

The API decrypts it server side with the matching private key.
"""

import asyncio
import base64
import inspect
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Awaitable, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

from .constants import CARD_HASH_SEPARATOR
from .exceptions import EncryptionError
from .utils.formatters import build_payload, get_card_field, sanitize_digits

logger = logging.getLogger(__name__)

PKCS8_PEM_HEADER = "-----BEGIN PUBLIC KEY-----"


@dataclass(frozen=True)
class CardRecord:
    """Card data as typed by the card holder."""
    card_number: str
    card_holder_name: str
    card_expiration_date: str
    card_cvv: str

    @classmethod
    def from_value(cls, card: Any) -> "CardRecord":
        """Build a record from a CardRecord, a mapping or any object with card attributes."""
        if isinstance(card, cls):
            return card
        return cls(
            card_number=get_card_field(card, 'card_number'),
            card_holder_name=get_card_field(card, 'card_holder_name'),
            card_expiration_date=get_card_field(card, 'card_expiration_date'),
            card_cvv=get_card_field(card, 'card_cvv'),
        )


@dataclass(frozen=True)
class KeyDescriptor:
    """Public key issued by the API, as returned by the card hash key endpoint."""
    id: str
    public_key: str

    @classmethod
    def from_value(cls, value: Any) -> "KeyDescriptor":
        """
        Coerce a KeyDescriptor or an API response mapping.

        Raises:
            EncryptionError: If the id or the public key is missing
        """
        if isinstance(value, cls):
            return value

        if isinstance(value, Mapping):
            key_id = value.get('id')
            public_key = value.get('public_key')
        else:
            key_id = getattr(value, 'id', None)
            public_key = getattr(value, 'public_key', None)

        if key_id is None or key_id == '':
            raise EncryptionError("Key descriptor has no id")
        if not public_key:
            raise EncryptionError(f"Key descriptor {key_id} has no public_key")

        return cls(id=str(key_id), public_key=public_key)


KeyLike = Union[KeyDescriptor, Mapping]


def _load_rsa_public_key(pem: str) -> RSAPublicKey:
    """Parse a PEM encoded RSA public key (PKCS#1 or PKCS#8)."""
    try:
        public_key = serialization.load_pem_public_key(pem.encode('utf-8'))
    except (ValueError, TypeError, AttributeError, UnsupportedAlgorithm) as e:
        raise EncryptionError(f"Invalid public key: {str(e)}")

    if not isinstance(public_key, RSAPublicKey):
        raise EncryptionError(
            f"Public key must be an RSA key. Got: {type(public_key).__name__}"
        )

    return public_key


def encrypt_payload(key_descriptor: KeyLike, payload: str) -> str:
    """
    Encrypt a card payload with RSA PKCS#1 v1.5.

    Args:
        key_descriptor: Key descriptor holding the PEM public key
        payload: Serialized card (see build_payload)

    Returns:
        Base64 encoded ciphertext

    Raises:
        EncryptionError: If the key is malformed or the payload does not fit
    """
    key_descriptor = KeyDescriptor.from_value(key_descriptor)
    public_key = _load_rsa_public_key(key_descriptor.public_key)

    try:
        ciphertext = public_key.encrypt(payload.encode('utf-8'), padding.PKCS1v15())
    except ValueError as e:
        raise EncryptionError(
            f"Failed to encrypt card payload: {str(e)}",
            error_code=key_descriptor.id
        )

    return base64.b64encode(ciphertext).decode('ascii')


def generate_card_hash(key_descriptor: KeyLike, payload: str) -> str:
    """
    Build a card hash from a serialized card.

    The key id is used verbatim and may itself contain underscores. The
    base64 ciphertext never does, so the id is everything before the last
    separator.
    """
    key_descriptor = KeyDescriptor.from_value(key_descriptor)
    encrypted = encrypt_payload(key_descriptor, payload)
    return f"{key_descriptor.id}{CARD_HASH_SEPARATOR}{encrypted}"


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def _resolve_payload(card: Any) -> str:
    card = await _resolve(card)
    return build_payload(card)


async def encrypt_card(
    options: Union[KeyLike, Awaitable[KeyLike]],
    card: Union[CardRecord, Mapping, Awaitable[Any]],
) -> str:
    """
    Encrypt a card into a card hash.

    The key descriptor and the card payload do not depend on each other and
    are resolved concurrently; encryption starts once both are ready.

    Args:
        options: Key descriptor, or an awaitable resolving to one (e.g. a
            pending card hash key request)
        card: CardRecord or mapping with card_number, card_holder_name,
            card_expiration_date and card_cvv (e.g. '4111111111111111',
            'Pedro Paulo', '12/25', '543'), or an awaitable resolving to one

    Returns:
        Card hash string "<key id>_<base64 ciphertext>"

    Raises:
        EncryptionError: If the key cannot be used to encrypt the card
    """
    key_descriptor, payload = await asyncio.gather(
        _resolve(options),
        _resolve_payload(card),
    )

    key_descriptor = KeyDescriptor.from_value(key_descriptor)
    logger.debug(f"Generating card hash with key: {key_descriptor.id}")

    return generate_card_hash(key_descriptor, payload)


def encrypt_card_number(key_descriptor: Any, card_number: Any) -> str:
    """
    Encrypt a standalone card number with RSA-OAEP (SHA-256).

    This is not interchangeable with encrypt_payload: the endpoints that
    accept an encrypted card number expect OAEP and a PKCS#8 key, and the
    result carries no key id.

    Args:
        key_descriptor: Mapping or object with a PKCS#8 PEM public key under
            public_key (publicKey is also accepted)
        card_number: Numeric value to encrypt; used as given

    Returns:
        Base64 encoded ciphertext

    Raises:
        EncryptionError: If the key is not a PKCS#8 RSA key or encryption fails
    """
    if isinstance(key_descriptor, Mapping):
        pem = key_descriptor.get('public_key') or key_descriptor.get('publicKey')
    else:
        pem = getattr(key_descriptor, 'public_key', None)
        pem = pem or getattr(key_descriptor, 'publicKey', None)

    if not pem:
        raise EncryptionError("Key descriptor has no public_key")

    if not isinstance(pem, str) or PKCS8_PEM_HEADER not in pem:
        raise EncryptionError("Card number encryption requires a PKCS#8 public key")

    public_key = _load_rsa_public_key(pem)

    try:
        ciphertext = public_key.encrypt(
            str(card_number).encode('utf-8'),
            padding.OAEP(
                mgf=padding.MGF1(algorithm=hashes.SHA256()),
                algorithm=hashes.SHA256(),
                label=None,
            ),
        )
    except ValueError as e:
        raise EncryptionError(f"Failed to encrypt card number: {str(e)}")

    return base64.b64encode(ciphertext).decode('ascii')


__all__ = [
    'CardRecord',
    'KeyDescriptor',
    'sanitize_digits',
    'build_payload',
    'encrypt_payload',
    'generate_card_hash',
    'encrypt_card',
    'encrypt_card_number',
]
