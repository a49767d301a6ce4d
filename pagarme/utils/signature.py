"""
Postback signature generation and verification utilities.
"""

import hashlib
import hmac
from typing import Union

from ..constants import SIGNATURE_ALGORITHM


def calculate_signature(api_key: str, body: Union[str, bytes]) -> str:
    """
    Calculate the signature Pagar.me sends with a postback.

    The signature is an HMAC-SHA1 of the raw request body keyed by the
    API key, hex encoded.

    Args:
        api_key: Account API key
        body: Raw postback body, exactly as received

    Returns:
        Hex digest string
    """
    if isinstance(body, str):
        body = body.encode('utf-8')

    return hmac.new(
        api_key.encode('utf-8'),
        body,
        hashlib.sha1
    ).hexdigest()


def verify_signature(
    api_key: str,
    body: Union[str, bytes],
    signature: str
) -> bool:
    """
    Verify the X-Hub-Signature header of a postback.

    Args:
        api_key: Account API key
        body: Raw postback body
        signature: Header value, with or without the "sha1=" prefix

    Returns:
        True if signature is valid, False otherwise
    """
    if not api_key or not signature:
        return False

    algorithm, separator, digest = signature.partition('=')
    if separator:
        if algorithm != SIGNATURE_ALGORITHM:
            return False
    else:
        digest = signature

    expected_signature = calculate_signature(api_key, body)

    # Header is sender-controlled; compare bytes so non-ASCII input is a mismatch
    return hmac.compare_digest(
        expected_signature.encode('ascii'),
        digest.encode('utf-8', errors='replace')
    )
