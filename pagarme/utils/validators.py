"""
Validation utilities for Pagar.me client operations.
"""

import re
from typing import Any, Union

from ..constants import (
    CARD_NUMBER_MIN_LENGTH, CARD_NUMBER_MAX_LENGTH, CVV_LENGTHS, PaymentMethod
)
from ..exceptions import InvalidAmountError, InvalidCardError, ValidationError
from ..security import CardRecord
from .formatters import sanitize_digits


def luhn_checksum_valid(card_number: str) -> bool:
    """
    Check a digit string against the Luhn (mod 10) algorithm.

    Args:
        card_number: Card number containing only digits

    Returns:
        True if the check digit is correct
    """
    total = 0
    for index, char in enumerate(reversed(card_number)):
        digit = int(char)
        if index % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def validate_card_number(card_number: Any) -> str:
    """
    Validate a card number.

    Args:
        card_number: Card number, formatting characters allowed

    Returns:
        Card number digits

    Raises:
        InvalidCardError: If the number is empty, has the wrong length or fails Luhn
    """
    digits = sanitize_digits(card_number)

    if not digits:
        raise InvalidCardError("Card number is required")

    if not CARD_NUMBER_MIN_LENGTH <= len(digits) <= CARD_NUMBER_MAX_LENGTH:
        raise InvalidCardError(
            f"Card number must have between {CARD_NUMBER_MIN_LENGTH} and "
            f"{CARD_NUMBER_MAX_LENGTH} digits. Got: {len(digits)} digits"
        )

    if not luhn_checksum_valid(digits):
        raise InvalidCardError("Card number failed the Luhn check")

    return digits


def validate_expiration_date(expiration_date: Any) -> str:
    """
    Validate a card expiration date given as MMYY or MM/YY.

    Returns:
        Expiration date digits (MMYY)

    Raises:
        InvalidCardError: If the date is not four digits with a valid month
    """
    digits = sanitize_digits(expiration_date)

    if len(digits) != 4:
        raise InvalidCardError(
            f"Card expiration date must be in MMYY format. Got: {expiration_date!r}"
        )

    month = int(digits[:2])
    if not 1 <= month <= 12:
        raise InvalidCardError(f"Invalid expiration month: {digits[:2]}")

    return digits


def validate_cvv(cvv: Any) -> str:
    """Validate a card security code, returning its digits."""
    digits = sanitize_digits(cvv)

    if len(digits) not in CVV_LENGTHS:
        raise InvalidCardError("Card CVV must have 3 or 4 digits")

    return digits


def validate_card(card: Any) -> CardRecord:
    """
    Validate card data before it is encrypted.

    Only checks the values; the returned record keeps the caller's
    formatting so the card hash is built from what the user typed.

    Args:
        card: CardRecord or mapping with the four card fields

    Returns:
        CardRecord built from the input

    Raises:
        InvalidCardError: If any field is invalid
    """
    record = CardRecord.from_value(card)

    validate_card_number(record.card_number)

    if not str(record.card_holder_name).strip():
        raise InvalidCardError("Card holder name is required")

    validate_expiration_date(record.card_expiration_date)
    validate_cvv(record.card_cvv)

    return record


def validate_amount(amount: Union[int, str]) -> int:
    """
    Validate a transaction amount in cents.

    Args:
        amount: Amount in cents (e.g., 1000 for R$ 10,00)

    Returns:
        Validated amount as int

    Raises:
        InvalidAmountError: If amount is invalid
    """
    if isinstance(amount, bool):
        raise InvalidAmountError(f"Invalid amount format: {amount}")

    if isinstance(amount, str):
        if not re.match(r'^[0-9]+$', amount.strip()):
            raise InvalidAmountError(f"Invalid amount format: {amount}")
        amount = int(amount.strip())

    if not isinstance(amount, int):
        raise InvalidAmountError(
            f"Amount must be an integer number of cents. Got: {amount!r}"
        )

    if amount <= 0:
        raise InvalidAmountError(f"Amount must be greater than zero. Got: {amount}")

    return amount


def validate_transaction_id(transaction_id: Union[int, str]) -> str:
    """
    Validate a transaction id.

    Returns:
        Transaction id as a string of digits

    Raises:
        ValidationError: If the id is missing or not a positive integer
    """
    if transaction_id is None or transaction_id == '':
        raise ValidationError("Transaction id is required")

    transaction_id = str(transaction_id).strip()

    if not re.match(r'^[0-9]+$', transaction_id) or int(transaction_id) == 0:
        raise ValidationError(
            f"Transaction id must be a positive integer. Got: {transaction_id}"
        )

    return transaction_id


def validate_transaction_data(data: dict) -> dict:
    """
    Validate the body of a new transaction.

    Args:
        data: Transaction payload (amount, card_hash or card_id, ...)

    Returns:
        Copy of data with a validated amount

    Raises:
        ValidationError: If required fields are missing
    """
    if not data:
        raise ValidationError("Transaction data is required")

    payload = dict(data)
    payload['amount'] = validate_amount(payload.get('amount'))

    payment_method = payload.get('payment_method', PaymentMethod.CREDIT_CARD.value)
    has_card = payload.get('card_hash') or payload.get('card_id')
    if payment_method != PaymentMethod.BOLETO.value and not has_card:
        raise ValidationError(
            "Credit card transactions require either card_hash or card_id"
        )

    return payload

