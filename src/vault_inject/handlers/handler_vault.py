# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""HashiCorp Vault Handler - hvac client driven from asyncio.

Wraps the handful of Vault API calls vault-inject needs:

    - userpass / ldap login
    - listing mounted secret engines (``sys/internal/ui/mounts``)
    - reading KV v2 documents (latest version)
    - reading Cubbyhole documents

Security Features:
    - SecretStr protection for tokens and passwords
    - Sanitized error messages (never expose secrets in logs)
    - SSL verification enabled by default

Thread Pool Management:
    hvac is synchronous, so every call runs in a bounded ThreadPoolExecutor via
    ``loop.run_in_executor`` and is wrapped in ``asyncio.wait_for`` with the
    configured timeout. ``max_concurrent_operations`` bounds how many Vault
    requests are in flight at once.

Error Mapping:
    hvac and requests exceptions are translated into the VaultTransportError
    family. There is no retry here; a failed call fails the invocation.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar
from uuid import UUID, uuid4

import hvac
import hvac.exceptions
import requests.exceptions
from pydantic import SecretStr

from vault_inject.errors import (
    ModelErrorContext,
    VaultForbiddenError,
    VaultInvalidPathError,
    VaultInvalidRequestError,
    VaultResponseError,
    VaultTimeoutError,
    VaultTransportError,
)
from vault_inject.models import ModelVaultClientConfig

T = TypeVar("T")

logger = logging.getLogger(__name__)

MOUNTS_API_PATH: str = "/v1/sys/internal/ui/mounts"


class VaultHandler:
    """Async facade over a synchronous hvac.Client.

    Lifecycle:
        handler = VaultHandler(config)
        handler.initialize()
        handler.set_token(session.token)
        ...
        await handler.shutdown()

    Security Policy - Token Handling:
        1. Tokens are accepted as SecretStr and only unwrapped when handed to hvac
        2. Error messages describe the failing operation, never the token
        3. Login responses are returned to the caller; this class does not log them
    """

    def __init__(self, config: ModelVaultClientConfig) -> None:
        self._config = config
        self._client: hvac.Client | None = None
        self._executor: ThreadPoolExecutor | None = None
        self._initialized: bool = False

    @property
    def config(self) -> ModelVaultClientConfig:
        return self._config

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def max_workers(self) -> int:
        """Return thread pool max workers (public API for tests)."""
        return self._config.max_concurrent_operations

    def _create_hvac_client(self) -> hvac.Client:
        """Create the hvac client, without a token until login completes."""
        return hvac.Client(
            url=self._config.url,
            namespace=self._config.namespace,
            verify=self._config.verify_ssl,
            timeout=self._config.timeout_seconds,
        )

    def initialize(self) -> None:
        """Create the hvac client and the bounded thread pool."""
        if self._initialized:
            return
        self._client = self._create_hvac_client()
        self._executor = ThreadPoolExecutor(
            max_workers=self._config.max_concurrent_operations,
            thread_name_prefix="vault_handler_",
        )
        self._initialized = True
        logger.debug(
            "%s initialized",
            self.__class__.__name__,
            extra={
                "url": self._config.url,
                "namespace": self._config.namespace,
                "timeout_seconds": self._config.timeout_seconds,
                "verify_ssl": self._config.verify_ssl,
                "thread_pool_max_workers": self._config.max_concurrent_operations,
            },
        )

    async def shutdown(self) -> None:
        """Release the thread pool and drop the client."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        self._client = None
        self._initialized = False
        logger.debug("VaultHandler shutdown complete")

    def set_token(self, token: SecretStr) -> None:
        """Use ``token`` for every subsequent request."""
        self._require_client().token = token.get_secret_value()

    def _require_client(self) -> hvac.Client:
        if not self._initialized or self._client is None:
            raise VaultTransportError(
                "VaultHandler not initialized. Call initialize() first.",
                context=ModelErrorContext(
                    operation="execute",
                    target_name=self._config.url,
                ),
            )
        return self._client

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def login_userpass(
        self,
        username: str,
        password: SecretStr,
        mount_point: str,
        correlation_id: UUID | None = None,
    ) -> dict[str, object]:
        """Log in through a userpass auth mount and return the raw response."""
        client = self._require_client()

        def login_func() -> dict[str, object]:
            return client.auth.userpass.login(
                username=username,
                password=password.get_secret_value(),
                use_token=False,
                mount_point=mount_point,
            )

        return await self._execute(
            "login_userpass", login_func, correlation_id, target=f"auth/{mount_point}"
        )

    async def login_ldap(
        self,
        username: str,
        password: SecretStr,
        mount_point: str,
        correlation_id: UUID | None = None,
    ) -> dict[str, object]:
        """Log in through an LDAP auth mount and return the raw response."""
        client = self._require_client()

        def login_func() -> dict[str, object]:
            return client.auth.ldap.login(
                username=username,
                password=password.get_secret_value(),
                use_token=False,
                mount_point=mount_point,
            )

        return await self._execute(
            "login_ldap", login_func, correlation_id, target=f"auth/{mount_point}"
        )

    async def list_secret_mounts(
        self, correlation_id: UUID | None = None
    ) -> dict[str, object]:
        """Return the ``data.secret`` section of the UI mounts listing.

        This endpoint is what the Vault CLI uses to find mount points; it
        needs fewer permissions than ``sys/mounts``.
        """
        client = self._require_client()

        def list_func() -> dict[str, object]:
            return client.adapter.get(MOUNTS_API_PATH)

        response = await self._execute(
            "list_mounts", list_func, correlation_id, target=MOUNTS_API_PATH
        )
        data = response.get("data") if isinstance(response, dict) else None
        secret_mounts = data.get("secret") if isinstance(data, dict) else None
        if not isinstance(secret_mounts, dict):
            raise VaultResponseError(
                "Unexpected response listing secret mounts",
                context=self._create_error_context("list_mounts", correlation_id),
            )
        return secret_mounts

    async def read_kv2(
        self,
        mount_point: str,
        path: str,
        correlation_id: UUID | None = None,
    ) -> dict[str, object]:
        """Read the latest version of a KV v2 document.

        Returns:
            The document's key/value payload (``data.data``).
        """
        client = self._require_client()

        def read_func() -> dict[str, object]:
            return client.secrets.kv.v2.read_secret_version(
                path=path,
                mount_point=mount_point,
                raise_on_deleted_version=True,
            )

        result = await self._execute(
            "read_kv2", read_func, correlation_id, target=f"{mount_point}/{path}"
        )
        data_obj = result.get("data") if isinstance(result, dict) else None
        secret_data = data_obj.get("data") if isinstance(data_obj, dict) else None
        if not isinstance(secret_data, dict):
            raise VaultResponseError(
                "Unexpected response reading KV2 secret",
                context=self._create_error_context(
                    "read_kv2", correlation_id, secret_path=f"{mount_point}/{path}"
                ),
            )
        return secret_data

    async def read_cubbyhole(
        self,
        mount_point: str,
        path: str,
        correlation_id: UUID | None = None,
    ) -> dict[str, object]:
        """Read a Cubbyhole document (flat, unversioned)."""
        client = self._require_client()
        full_path = f"{mount_point}/{path}"

        def read_func() -> dict[str, object] | None:
            return client.read(full_path)

        result = await self._execute(
            "read_cubbyhole", read_func, correlation_id, target=full_path
        )
        if result is None:
            raise VaultInvalidPathError(
                "Secret path not found or invalid",
                context=self._create_error_context(
                    "read_cubbyhole", correlation_id, secret_path=full_path
                ),
            )
        secret_data = result.get("data") if isinstance(result, dict) else None
        if not isinstance(secret_data, dict):
            raise VaultResponseError(
                "Unexpected response reading Cubbyhole secret",
                context=self._create_error_context(
                    "read_cubbyhole", correlation_id, secret_path=full_path
                ),
            )
        return secret_data

    # -------------------------------------------------------------------------
    # Execution and error mapping
    # -------------------------------------------------------------------------

    def _create_error_context(
        self,
        operation: str,
        correlation_id: UUID | None,
        secret_path: str | None = None,
    ) -> ModelErrorContext:
        """Create standard error context for Vault operations."""
        return ModelErrorContext(
            operation=operation,
            target_name=self._config.url,
            secret_path=secret_path,
            correlation_id=correlation_id,
        )

    async def _execute(
        self,
        operation: str,
        func: Callable[[], T],
        correlation_id: UUID | None,
        target: str,
    ) -> T:
        """Run a synchronous hvac call in the thread pool with a timeout.

        Args:
            operation: Operation name for logging and error context
            func: Callable to execute (synchronous hvac method)
            correlation_id: Correlation ID for tracing
            target: Vault path or mount the call addresses (for diagnostics)

        Raises:
            VaultTimeoutError: If the call exceeds ``timeout_seconds``
            VaultForbiddenError: On 401/403 responses
            VaultInvalidPathError: On 404 responses
            VaultInvalidRequestError: On 400 responses
            VaultTransportError: If Vault cannot be reached, is down or sealed
            VaultResponseError: On any other Vault error
        """
        self._require_client()
        correlation_id = correlation_id or uuid4()
        timeout_seconds = self._config.timeout_seconds
        loop = asyncio.get_running_loop()

        logger.debug(
            "Executing Vault operation",
            extra={
                "operation": operation,
                "target": target,
                "correlation_id": str(correlation_id),
            },
        )

        try:
            return await asyncio.wait_for(
                loop.run_in_executor(self._executor, func),
                timeout=timeout_seconds,
            )
        except TimeoutError as e:
            raise VaultTimeoutError(
                f"Vault operation timed out after {timeout_seconds}s",
                context=self._create_error_context(operation, correlation_id),
                target=target,
                timeout_seconds=timeout_seconds,
            ) from e
        except (hvac.exceptions.Forbidden, hvac.exceptions.Unauthorized) as e:
            raise VaultForbiddenError(
                "Vault operation forbidden - check token permissions",
                context=self._create_error_context(operation, correlation_id),
                target=target,
            ) from e
        except hvac.exceptions.InvalidPath as e:
            raise VaultInvalidPathError(
                "Secret path not found or invalid",
                context=self._create_error_context(operation, correlation_id),
                target=target,
            ) from e
        except hvac.exceptions.InvalidRequest as e:
            raise VaultInvalidRequestError(
                f"Vault rejected the request: {_vault_error_summary(e)}",
                context=self._create_error_context(operation, correlation_id),
                target=target,
            ) from e
        except hvac.exceptions.VaultDown as e:
            raise VaultTransportError(
                "Vault server is unavailable (sealed or down)",
                context=self._create_error_context(operation, correlation_id),
                target=target,
            ) from e
        except hvac.exceptions.VaultError as e:
            raise VaultResponseError(
                f"Vault operation failed: {_vault_error_summary(e)}",
                context=self._create_error_context(operation, correlation_id),
                target=target,
                error_type=type(e).__name__,
            ) from e
        except requests.exceptions.Timeout as e:
            raise VaultTimeoutError(
                f"Vault operation timed out after {timeout_seconds}s",
                context=self._create_error_context(operation, correlation_id),
                target=target,
                timeout_seconds=timeout_seconds,
            ) from e
        except requests.exceptions.RequestException as e:
            raise VaultTransportError(
                f"Failed to connect to Vault: {type(e).__name__}",
                context=self._create_error_context(operation, correlation_id),
                target=target,
            ) from e


def _vault_error_summary(error: hvac.exceptions.VaultError) -> str:
    """Vault's own error strings, which never contain request secrets."""
    errors = getattr(error, "errors", None)
    if isinstance(errors, list) and errors:
        return "; ".join(str(item) for item in errors)
    return type(error).__name__


__all__ = ["MOUNTS_API_PATH", "VaultHandler"]
