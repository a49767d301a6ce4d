"""
Pytest configuration and shared fixtures.
"""

import json

import django
from django.conf import settings

# Configure Django before any pagarme module reads settings
if not settings.configured:
    settings.configure(
        INSTALLED_APPS=['pagarme'],
        PAGARME_API_BASE_URL='https://api.pagar.me/1',
        PAGARME_API_KEY='ak_test_123',
        PAGARME_ENCRYPTION_KEY='ek_test_abc',
    )
    django.setup()

import pytest
import requests
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from pagarme.security import KeyDescriptor
from pagarme.utils.http_client import HTTPClient


@pytest.fixture(scope="session")
def rsa_private_key():
    """A 2048-bit RSA key pair shared across the test session."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def public_pem(rsa_private_key):
    """PKCS#8 (SubjectPublicKeyInfo) PEM of the test public key."""
    return rsa_private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")


@pytest.fixture(scope="session")
def pkcs1_public_pem(rsa_private_key):
    """PKCS#1 (BEGIN RSA PUBLIC KEY) PEM of the test public key."""
    return rsa_private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.PKCS1,
    ).decode("ascii")


@pytest.fixture
def key_descriptor(public_pem):
    return KeyDescriptor(id="ek_test_abc", public_key=public_pem)


@pytest.fixture
def card():
    """The card used in the API reference examples."""
    return {
        "card_number": "4111111111111111",
        "card_holder_name": "Pedro Paulo",
        "card_expiration_date": "12/25",
        "card_cvv": "543",
    }


@pytest.fixture
def make_response():
    """Build real requests.Response objects for stubbed sessions."""
    def _make_response(status_code=200, data=None, text=None):
        response = requests.Response()
        response.status_code = status_code
        response.encoding = "utf-8"
        if data is not None:
            response._content = json.dumps(data).encode("utf-8")
        else:
            response._content = (text or "").encode("utf-8")
        return response

    return _make_response


@pytest.fixture
def http_client():
    client = HTTPClient("https://api.pagar.me/1", timeout=5)
    yield client
    client.close()
