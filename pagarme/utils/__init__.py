"""
Utility modules for Pagar.me client operations.

Validators are imported from pagarme.utils.validators directly; they depend
on pagarme.security, which itself uses the formatters below.
"""

from .http_client import HTTPClient
from .formatters import (
    sanitize_digits,
    build_payload,
    mask_card_number
)
from .signature import calculate_signature, verify_signature

__all__ = [
    'HTTPClient',
    'sanitize_digits',
    'build_payload',
    'mask_card_number',
    'calculate_signature',
    'verify_signature',
]
