"""
Constants and enums for Pagar.me client operations.
"""

from enum import Enum


class PaymentMethod(str, Enum):
    """Supported payment methods."""
    CREDIT_CARD = "credit_card"
    BOLETO = "boleto"


class AuthStrategy(str, Enum):
    """Ways a client can authenticate against the API."""
    API_KEY = "api_key"
    ENCRYPTION_KEY = "encryption_key"
    SESSION = "session"


# API Endpoints
class APIEndpoints:
    """Pagar.me API endpoints."""
    SESSIONS = "/sessions"

    # Transaction endpoints
    TRANSACTIONS = "/transactions"
    TRANSACTION = "/transactions/{id}"
    CAPTURE_TRANSACTION = "/transactions/{id}/capture"
    REFUND_TRANSACTION = "/transactions/{id}/refund"
    CARD_HASH_KEY = "/transactions/card_hash_key"


# Card hash settings
CARD_HASH_SEPARATOR = "_"
CARD_FIELDS = (
    "card_number",
    "card_holder_name",
    "card_expiration_date",
    "card_cvv",
)
NUMERIC_CARD_FIELDS = ("card_number", "card_expiration_date", "card_cvv")

# Card validation settings
CARD_NUMBER_MIN_LENGTH = 13
CARD_NUMBER_MAX_LENGTH = 19
CVV_LENGTHS = (3, 4)

# Postback settings
SIGNATURE_ALGORITHM = "sha1"

# Values masked before request payloads are logged
SENSITIVE_PARAMS = ("api_key", "encryption_key", "session_id", "password", "card_hash")

# Default settings
DEFAULT_API_BASE_URL = "https://api.pagar.me/1"
DEFAULT_TIMEOUT = 30  # seconds
MAX_RETRIES = 3
DEFAULT_PAGE_SIZE = 10
