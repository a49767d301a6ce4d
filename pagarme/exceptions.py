"""
Custom exceptions for Pagar.me client operations.
"""


class PagarmeException(Exception):
    """Base exception for all Pagar.me-related errors."""

    def __init__(self, message, error_code=None, response_data=None):
        self.message = message
        self.error_code = error_code
        self.response_data = response_data
        super().__init__(self.message)


class AuthenticationError(PagarmeException):
    """Raised when authentication with the Pagar.me API fails."""
    pass


class EncryptionError(PagarmeException):
    """Raised when a card hash or card number cannot be encrypted."""
    pass


class TransactionError(PagarmeException):
    """Raised when a transaction operation fails."""
    pass


class ValidationError(PagarmeException):
    """Raised when input validation fails."""
    pass


class APIError(PagarmeException):
    """Raised when the Pagar.me API returns an error."""
    pass


class ConfigurationError(PagarmeException):
    """Raised when there's a configuration issue."""
    pass


class InvalidCardError(ValidationError):
    """Raised when card data is invalid."""
    pass


class InvalidAmountError(ValidationError):
    """Raised when amount is invalid."""
    pass
