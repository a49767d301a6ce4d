"""
Service modules for Pagar.me client operations.
"""

from .auth_service import AuthService
from .transaction_service import TransactionService
from .security_service import SecurityService
from .postback_service import PostbackService

__all__ = [
    'AuthService',
    'TransactionService',
    'SecurityService',
    'PostbackService',
]
