"""Pytest configuration and shared fixtures for vault-inject tests."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import MagicMock

import hvac.exceptions
import pytest

from vault_inject.handlers import VaultHandler
from vault_inject.models import ModelVaultClientConfig

VAULT_URL = "https://vault.example.com:8200"

# Shape of GET /v1/sys/internal/ui/mounts, ``data.secret`` section only.
SECRET_MOUNTS: dict[str, object] = {
    "secret/": {"type": "kv", "options": {"version": "2"}},
    "cubbyhole/": {"type": "cubbyhole", "options": None},
    "legacy/": {"type": "kv", "options": {"version": "1"}},
    "transit/": {"type": "transit", "options": None},
}


def build_hvac_client(
    kv2_documents: dict[str, dict[str, object]] | None = None,
    cubbyhole_documents: dict[str, dict[str, object]] | None = None,
    login_response: dict[str, object] | None = None,
) -> MagicMock:
    """Build a mocked hvac.Client serving the given documents.

    Args:
        kv2_documents: ``mount/path`` -> key/value payload for KV2 reads
        cubbyhole_documents: ``mount/path`` -> key/value payload for plain reads
        login_response: Response returned by userpass and ldap logins
    """
    kv2_documents = kv2_documents or {}
    cubbyhole_documents = cubbyhole_documents or {}
    client = MagicMock()

    def read_secret_version(
        path: str, mount_point: str, raise_on_deleted_version: bool = True
    ) -> dict[str, object]:
        document = kv2_documents.get(f"{mount_point}/{path}")
        if document is None:
            raise hvac.exceptions.InvalidPath()
        return {"data": {"data": document, "metadata": {"version": 1}}}

    def read(path: str) -> dict[str, object] | None:
        document = cubbyhole_documents.get(path)
        if document is None:
            return None
        return {"data": document}

    client.secrets.kv.v2.read_secret_version.side_effect = read_secret_version
    client.read.side_effect = read
    client.adapter.get.return_value = {"data": {"secret": SECRET_MOUNTS}}

    response = login_response or {
        "auth": {"client_token": "s.fresh-token", "lease_duration": 3600}
    }
    client.auth.userpass.login.return_value = response
    client.auth.ldap.login.return_value = response
    return client


@pytest.fixture
def vault_config() -> ModelVaultClientConfig:
    """Provide test Vault configuration."""
    return ModelVaultClientConfig(url=VAULT_URL, timeout_seconds=5.0)


@pytest.fixture
def mock_handler(vault_config: ModelVaultClientConfig) -> MagicMock:
    """Provide a VaultHandler mock; async methods are AsyncMocks."""
    handler = MagicMock(spec=VaultHandler)
    handler.config = vault_config
    return handler


@pytest.fixture
def hvac_client_factory() -> Callable[..., MagicMock]:
    """Provide ``build_hvac_client`` to tests that need a mocked hvac.Client."""
    return build_hvac_client
