"""
HTTP client for Pagar.me API communication.
"""

import requests
import logging
from typing import Dict, Any, Optional
from pagarme.exceptions import APIError, AuthenticationError
from pagarme.constants import DEFAULT_TIMEOUT, MAX_RETRIES, SENSITIVE_PARAMS

logger = logging.getLogger(__name__)

# A POST is only resent when it never reached the server. ConnectTimeout is a
# ConnectionError; ReadTimeout is not.
POST_RETRY_ON = (requests.ConnectionError,)
GET_RETRY_ON = (requests.ConnectionError, requests.Timeout)


class HTTPClient:
    """
    HTTP client wrapper for Pagar.me API requests.
    Handles request/response, error handling, retries, and logging.
    """

    def __init__(self, base_url: str, timeout: int = DEFAULT_TIMEOUT):
        """
        Initialize HTTP client.

        Args:
            base_url: Base URL for API requests
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()

    def _get_full_url(self, endpoint: str) -> str:
        """Get full URL for endpoint."""
        endpoint = endpoint.lstrip('/')
        return f"{self.base_url}/{endpoint}"

    def _log_request(self, method: str, url: str, data: Optional[Dict] = None):
        """Log API request details."""
        logger.info(f"Pagar.me API Request: {method} {url}")
        if data:
            logger.debug(f"Payload: {self._sanitize_params(data)}")

    def _log_response(self, response: requests.Response):
        """Log API response details."""
        logger.info(f"Pagar.me API Response: {response.status_code}")
        try:
            logger.debug(f"Response: {self._sanitize_params(response.json())}")
        except ValueError:
            logger.debug(f"Response: {response.text}")

    def _sanitize_params(self, data: Any) -> Any:
        """Mask credentials and card hashes in data before logging."""
        if not isinstance(data, dict):
            return data
        sanitized = data.copy()
        for key in SENSITIVE_PARAMS:
            if key in sanitized:
                sanitized[key] = '***'
        return sanitized

    def _error_message(self, response: requests.Response, default: str) -> str:
        """Extract the first error message from an API error body."""
        try:
            error_data = response.json()
        except ValueError:
            return response.text or default

        if isinstance(error_data, dict):
            errors = error_data.get('errors') or []
            if errors and isinstance(errors[0], dict) and errors[0].get('message'):
                return errors[0]['message']
            return error_data.get('message', default)
        return default

    def _handle_response(self, response: requests.Response) -> Any:
        """
        Handle API response and extract data.

        Args:
            response: Response object from requests

        Returns:
            Response data (dict, or list for collection endpoints)

        Raises:
            APIError: If response indicates an error
            AuthenticationError: If authentication fails
        """
        self._log_response(response)

        if response.status_code == 401:
            raise AuthenticationError(
                self._error_message(
                    response,
                    "Authentication failed. Please check your API credentials."
                ),
                error_code=401,
                response_data=response.text
            )

        if response.status_code == 403:
            raise AuthenticationError(
                self._error_message(
                    response,
                    "Access forbidden. Please check your API permissions."
                ),
                error_code=403,
                response_data=response.text
            )

        if response.status_code >= 400:
            raise APIError(
                self._error_message(
                    response,
                    f"API request failed with status {response.status_code}"
                ),
                error_code=response.status_code,
                response_data=response.text
            )

        try:
            return response.json()
        except ValueError as e:
            raise APIError(
                f"Failed to parse API response: {str(e)}",
                response_data=response.text
            )

    def _send(self, send, method: str, url: str, retries: int, retry_on: tuple, **kwargs) -> Any:
        """Send a request, retrying on the given connection failures."""
        for attempt in range(retries):
            try:
                response = send(url, timeout=self.timeout, **kwargs)
                return self._handle_response(response)

            except retry_on as e:
                if attempt == retries - 1:
                    raise APIError(f"Connection failed after {retries} attempts: {str(e)}")
                logger.warning(
                    f"{method} {url} failed (attempt {attempt + 1}/{retries}): {str(e)}"
                )

            except requests.Timeout as e:
                # The server may have processed the request; do not resend it
                raise APIError(f"{method} {url} timed out waiting for a response: {str(e)}")

    def post(
        self,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        auth_params: Optional[Dict[str, str]] = None,
        retries: int = MAX_RETRIES
    ) -> Any:
        """
        Make POST request to API.

        Args:
            endpoint: API endpoint path
            data: Request payload
            auth_params: Credentials merged into the JSON body
            retries: Number of attempts when the connection cannot be
                established; read timeouts are never retried

        Returns:
            Response data
        """
        url = self._get_full_url(endpoint)
        body = dict(data or {})
        body.update(auth_params or {})

        self._log_request('POST', url, body)

        return self._send(
            self.session.post, 'POST', url, retries, POST_RETRY_ON,
            json=body,
            headers={'Content-Type': 'application/json'}
        )

    def get(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        auth_params: Optional[Dict[str, str]] = None,
        retries: int = MAX_RETRIES
    ) -> Any:
        """
        Make GET request to API.

        Args:
            endpoint: API endpoint path
            params: Query parameters
            auth_params: Credentials merged into the query string
            retries: Number of attempts on connection failure

        Returns:
            Response data
        """
        url = self._get_full_url(endpoint)
        query = dict(params or {})
        query.update(auth_params or {})

        self._log_request('GET', url, query)

        return self._send(
            self.session.get, 'GET', url, retries, GET_RETRY_ON,
            params=query
        )

    def close(self):
        """Close the session."""
        self.session.close()
