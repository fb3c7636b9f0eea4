"""Pytest fixtures and configuration for helloprint tests."""

from __future__ import annotations

import pytest

from helloprint.core.config import FingerprintConfig

from tests.fixtures.hellos import create_client_hello, create_server_hello


@pytest.fixture
def client_hello() -> bytes:
    """TLS 1.3 Client Hello: SNI, 4 real + 2 GREASE ciphers, 8 real + 1 GREASE extensions."""
    return create_client_hello()


@pytest.fixture
def client_hello_record() -> bytes:
    """The default Client Hello wrapped in a TLS record header."""
    return create_client_hello(record=True)


@pytest.fixture
def server_hello() -> bytes:
    """TLS 1.3 Server Hello selecting TLS_AES_128_GCM_SHA256."""
    return create_server_hello()


@pytest.fixture
def default_config() -> FingerprintConfig:
    """Create default configuration."""
    return FingerprintConfig()
