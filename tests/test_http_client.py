"""
Tests for the HTTP client wrapper.
"""

from unittest.mock import patch

import pytest
import requests

from pagarme.exceptions import APIError, AuthenticationError


class TestRequests:
    """Tests for request construction."""

    def test_get_merges_auth_into_query(self, http_client, make_response):
        with patch.object(
            http_client.session, "get", return_value=make_response(200, {"id": 123})
        ) as mock_get:
            data = http_client.get(
                "/transactions/123",
                params={"page": 1},
                auth_params={"api_key": "ak_test_123"},
            )

        assert data == {"id": 123}
        mock_get.assert_called_once_with(
            "https://api.pagar.me/1/transactions/123",
            timeout=5,
            params={"page": 1, "api_key": "ak_test_123"},
        )

    def test_post_merges_auth_into_body(self, http_client, make_response):
        with patch.object(
            http_client.session, "post", return_value=make_response(200, {"id": 1})
        ) as mock_post:
            http_client.post(
                "transactions",
                data={"amount": 1000},
                auth_params={"api_key": "ak_test_123"},
            )

        _, kwargs = mock_post.call_args
        assert mock_post.call_args[0][0] == "https://api.pagar.me/1/transactions"
        assert kwargs["json"] == {"amount": 1000, "api_key": "ak_test_123"}
        assert kwargs["headers"]["Content-Type"] == "application/json"

    def test_returns_lists(self, http_client, make_response):
        with patch.object(
            http_client.session, "get", return_value=make_response(200, [{"id": 1}])
        ):
            assert http_client.get("/transactions") == [{"id": 1}]


class TestErrorHandling:
    """Tests for response error mapping."""

    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_errors(self, http_client, make_response, status):
        response = make_response(status, {"errors": [{"message": "api_key inválida"}]})
        with patch.object(http_client.session, "get", return_value=response):
            with pytest.raises(AuthenticationError) as exc_info:
                http_client.get("/transactions/1")

        assert exc_info.value.error_code == status
        assert exc_info.value.message == "api_key inválida"

    def test_api_error_uses_first_error_message(self, http_client, make_response):
        response = make_response(400, {
            "errors": [
                {"type": "invalid_parameter", "parameter_name": "amount", "message": "amount is required"},
                {"type": "invalid_parameter", "parameter_name": "card_hash", "message": "other"},
            ],
            "url": "/transactions",
            "method": "post",
        })
        with patch.object(http_client.session, "post", return_value=response):
            with pytest.raises(APIError) as exc_info:
                http_client.post("/transactions", data={})

        assert exc_info.value.message == "amount is required"
        assert exc_info.value.error_code == 400

    def test_api_error_with_plain_text(self, http_client, make_response):
        with patch.object(
            http_client.session, "get", return_value=make_response(502, text="Bad Gateway")
        ):
            with pytest.raises(APIError, match="Bad Gateway"):
                http_client.get("/transactions/1")

    def test_unparsable_success_response(self, http_client, make_response):
        with patch.object(
            http_client.session, "get", return_value=make_response(200, text="<html>")
        ):
            with pytest.raises(APIError, match="Failed to parse API response"):
                http_client.get("/transactions/1")


class TestRetries:
    """Tests for connection retries."""

    def test_retries_connection_errors(self, http_client, make_response):
        with patch.object(
            http_client.session,
            "get",
            side_effect=[requests.ConnectionError("reset"), make_response(200, {"id": 1})],
        ) as mock_get:
            assert http_client.get("/transactions/1") == {"id": 1}

        assert mock_get.call_count == 2

    def test_gives_up_after_max_retries(self, http_client):
        with patch.object(
            http_client.session, "post", side_effect=requests.ConnectionError("reset")
        ) as mock_post:
            with pytest.raises(APIError, match="after 2 attempts"):
                http_client.post("/transactions", data={}, retries=2)

        assert mock_post.call_count == 2

    def test_post_read_timeout_is_not_resent(self, http_client):
        with patch.object(
            http_client.session, "post", side_effect=requests.ReadTimeout("slow")
        ) as mock_post:
            with pytest.raises(APIError, match="timed out waiting for a response"):
                http_client.post("/transactions", data={"amount": 1000})

        assert mock_post.call_count == 1

    def test_post_connect_timeout_is_retried(self, http_client, make_response):
        with patch.object(
            http_client.session,
            "post",
            side_effect=[requests.ConnectTimeout("no route"), make_response(200, {"id": 1})],
        ) as mock_post:
            assert http_client.post("/transactions", data={"amount": 1000}) == {"id": 1}

        assert mock_post.call_count == 2

    def test_get_read_timeout_is_retried(self, http_client, make_response):
        with patch.object(
            http_client.session,
            "get",
            side_effect=[requests.ReadTimeout("slow"), make_response(200, {"id": 1})],
        ) as mock_get:
            assert http_client.get("/transactions/1") == {"id": 1}

        assert mock_get.call_count == 2

    def test_http_errors_are_not_retried(self, http_client, make_response):
        with patch.object(
            http_client.session, "get", return_value=make_response(500, {"message": "boom"})
        ) as mock_get:
            with pytest.raises(APIError, match="boom"):
                http_client.get("/transactions/1")

        assert mock_get.call_count == 1
