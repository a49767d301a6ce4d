"""
Transaction service for Pagar.me card payments.
Handles transaction lookups, creation, capture, refunds and card hash keys.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from ..constants import APIEndpoints, DEFAULT_PAGE_SIZE
from ..exceptions import (
    AuthenticationError, PagarmeException, TransactionError, ValidationError
)
from ..utils.http_client import HTTPClient
from ..utils.validators import (
    validate_amount, validate_transaction_data, validate_transaction_id
)
from .auth_service import AuthService

logger = logging.getLogger(__name__)


class TransactionService:
    """
    Service for transaction operations.
    """

    def __init__(self, auth_service: AuthService, http_client: Optional[HTTPClient] = None):
        self.auth_service = auth_service
        self.http_client = http_client or auth_service.http_client

    def _request(self, method: str, endpoint: str, data: Optional[Dict[str, Any]] = None) -> Any:
        """Send an authenticated request, notifying the auth service on rejection."""
        auth_params = self.auth_service.get_auth_params()

        try:
            if method == 'GET':
                return self.http_client.get(
                    endpoint=endpoint,
                    params=data,
                    auth_params=auth_params
                )
            return self.http_client.post(
                endpoint=endpoint,
                data=data,
                auth_params=auth_params
            )
        except AuthenticationError as e:
            self.auth_service.handle_authentication_failure(e)
            raise

    def card_hash_key(self) -> Dict[str, Any]:
        """
        Fetch a public key for card hash generation.

        Returns:
            Dictionary containing:
                - id: Key id, prefixed to the card hash
                - public_key: PEM encoded RSA public key
                - date: Key creation timestamp
                - ip: Requesting IP as seen by the API

        Raises:
            AuthenticationError: If the credentials are rejected
            TransactionError: If the request fails
        """
        logger.info("Requesting card hash key")

        try:
            response = self._request('GET', APIEndpoints.CARD_HASH_KEY)
        except AuthenticationError:
            raise
        except PagarmeException as e:
            logger.error(f"Card hash key request failed: {str(e)}")
            raise TransactionError(
                f"Failed to get card hash key: {e.message}",
                error_code=e.error_code,
                response_data=e.response_data
            )

        logger.info(f"Card hash key retrieved: {response.get('id')}")
        return response

    def get(self, transaction_id: Union[int, str]) -> Dict[str, Any]:
        """
        Retrieve a transaction by id.

        Args:
            transaction_id: Transaction id

        Returns:
            Transaction object (id, status, amount, card, ...)

        Raises:
            ValidationError: If the id is invalid
            TransactionError: If the lookup fails
        """
        validated_id = validate_transaction_id(transaction_id)
        logger.info(f"Retrieving transaction: {validated_id}")

        try:
            response = self._request(
                'GET', APIEndpoints.TRANSACTION.format(id=validated_id)
            )
        except AuthenticationError:
            raise
        except PagarmeException as e:
            logger.error(f"Transaction lookup failed: {str(e)}")
            raise TransactionError(
                f"Failed to get transaction {validated_id}: {e.message}",
                error_code=e.error_code,
                response_data=e.response_data
            )

        logger.info(
            f"Transaction retrieved. ID: {validated_id}, Status: {response.get('status')}"
        )
        return response

    def find_all(
        self,
        page: int = 1,
        count: int = DEFAULT_PAGE_SIZE,
        **filters: Any
    ) -> List[Dict[str, Any]]:
        """
        List transactions.

        Args:
            page: Page number, starting at 1
            count: Page size
            **filters: Extra query filters (e.g., status='paid')

        Returns:
            List of transaction objects
        """
        if page < 1 or count < 1:
            raise ValidationError(f"Page and count must be positive. Got: {page}, {count}")

        params = {'page': page, 'count': count}
        params.update(filters)
        logger.info(f"Listing transactions: page={page}, count={count}")

        try:
            return self._request('GET', APIEndpoints.TRANSACTIONS, params)
        except AuthenticationError:
            raise
        except PagarmeException as e:
            logger.error(f"Transaction listing failed: {str(e)}")
            raise TransactionError(
                f"Failed to list transactions: {e.message}",
                error_code=e.error_code,
                response_data=e.response_data
            )

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a transaction.

        Args:
            data: Transaction payload. Requires amount (cents) and, for
                credit card payments, card_hash or card_id

        Returns:
            Created transaction object

        Raises:
            ValidationError: If the payload is invalid
            TransactionError: If creation fails
        """
        payload = validate_transaction_data(data)
        logger.info(f"Creating transaction: amount={payload['amount']}")

        try:
            response = self._request('POST', APIEndpoints.TRANSACTIONS, payload)
        except AuthenticationError:
            raise
        except PagarmeException as e:
            logger.error(f"Transaction creation failed: {str(e)}")
            raise TransactionError(
                f"Failed to create transaction: {e.message}",
                error_code=e.error_code,
                response_data=e.response_data
            )

        logger.info(
            f"Transaction created. ID: {response.get('id')}, Status: {response.get('status')}"
        )
        return response

    def capture(self, transaction_id: Union[int, str], amount: Optional[int] = None) -> Dict[str, Any]:
        """
        Capture an authorized transaction, optionally for a partial amount.
        """
        return self._update(
            APIEndpoints.CAPTURE_TRANSACTION, 'capture', transaction_id, amount
        )

    def refund(self, transaction_id: Union[int, str], amount: Optional[int] = None) -> Dict[str, Any]:
        """
        Refund a paid transaction, optionally for a partial amount.
        """
        return self._update(
            APIEndpoints.REFUND_TRANSACTION, 'refund', transaction_id, amount
        )

    def _update(
        self,
        endpoint: str,
        action: str,
        transaction_id: Union[int, str],
        amount: Optional[int]
    ) -> Dict[str, Any]:
        validated_id = validate_transaction_id(transaction_id)
        payload = {}
        if amount is not None:
            payload['amount'] = validate_amount(amount)

        logger.info(f"Requesting {action} of transaction: {validated_id}")

        try:
            response = self._request('POST', endpoint.format(id=validated_id), payload)
        except AuthenticationError:
            raise
        except PagarmeException as e:
            logger.error(f"Transaction {action} failed: {str(e)}")
            raise TransactionError(
                f"Failed to {action} transaction {validated_id}: {e.message}",
                error_code=e.error_code,
                response_data=e.response_data
            )

        logger.info(
            f"Transaction {action} done. ID: {validated_id}, Status: {response.get('status')}"
        )
        return response
