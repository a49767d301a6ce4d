"""
Data formatting utilities for Pagar.me card operations.
"""

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from ..constants import CARD_FIELDS, NUMERIC_CARD_FIELDS

_NON_DIGITS = re.compile(r'[^0-9]')


def sanitize_digits(value: Any) -> str:
    """
    Strip every character that is not an ASCII digit.

    Args:
        value: Any value; it is converted with str() first

    Returns:
        The digits of value in their original order (possibly empty)
    """
    # \D would keep non-ASCII digits such as '٣'
    return _NON_DIGITS.sub('', str(value))


def get_card_field(card: Any, field: str) -> Any:
    """Read a card field from a mapping or an object, '' when absent."""
    if isinstance(card, Mapping):
        value = card.get(field)
    else:
        value = getattr(card, field, None)
    return '' if value is None else value


def build_payload(card: Any) -> str:
    """
    Serialize a card into the query string that gets encrypted.

    Args:
        card: CardRecord or mapping with the four card fields

    Returns:
        URL-encoded string, e.g.
        "card_number=4111111111111111&card_holder_name=Pedro+Paulo&..."
    """
    pairs = []
    for field in CARD_FIELDS:
        value = get_card_field(card, field)
        if field in NUMERIC_CARD_FIELDS:
            value = sanitize_digits(value)
        pairs.append((field, value))

    return urlencode(pairs)


def mask_card_number(card_number: Any) -> str:
    """
    Mask a card number for display.

    Args:
        card_number: Card number in any format

    Returns:
        Masked number keeping the first 6 and last 4 digits
        (e.g., "411111******1111")
    """
    digits = sanitize_digits(card_number)
    if len(digits) <= 10:
        return '*' * len(digits)
    return f"{digits[:6]}{'*' * (len(digits) - 10)}{digits[-4:]}"
