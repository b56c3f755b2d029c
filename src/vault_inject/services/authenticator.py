# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Vault Authenticator.

Turns a credential source into an authenticated session:

    1. Token auth: the token is used as-is, no login and no cache involvement
    2. Cache read (if enabled): an unexpired cached token skips login
    3. Login against the userpass or ldap auth mount, dispatched on the
       credential variant
    4. Cache write (if enabled) of the fresh token and its lease expiry

Every failure is terminal; there is no retry beyond what the transport does.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from pydantic import SecretStr

from vault_inject.enums import EnumAuthMethod
from vault_inject.errors import (
    AuthInvalidCredentialsError,
    AuthMalformedResponseError,
    AuthServiceUnreachableError,
    ModelErrorContext,
    VaultForbiddenError,
    VaultInvalidPathError,
    VaultInvalidRequestError,
    VaultTransportError,
)
from vault_inject.handlers import VaultHandler
from vault_inject.models import (
    AuthCredentials,
    ModelAuthSession,
    ModelCacheEntry,
    ModelCachePolicy,
    ModelLdapCredentials,
    ModelTokenCredentials,
    ModelUserPassCredentials,
)
from vault_inject.protocols import ProtocolCredentialSource
from vault_inject.services.token_cache import TokenCache

logger = logging.getLogger(__name__)


def build_credentials(
    method: EnumAuthMethod,
    principal: str,
    secret: SecretStr,
    auth_mount: str | None = None,
) -> AuthCredentials:
    """Build the credential variant for ``method``.

    ``secret`` is the token for token auth and the password otherwise.
    """
    if method is EnumAuthMethod.TOKEN:
        return ModelTokenCredentials(token=secret)
    if method is EnumAuthMethod.LDAP:
        return ModelLdapCredentials(
            username=principal, password=secret, mount=auth_mount
        )
    return ModelUserPassCredentials(
        username=principal, password=secret, mount=auth_mount
    )


class Authenticator:
    """Log in to Vault, reusing cached tokens where allowed.

    Args:
        handler: Initialized VaultHandler used for login requests
        token_cache: Token cache; None disables caching entirely
    """

    def __init__(
        self,
        handler: VaultHandler,
        token_cache: TokenCache | None = None,
    ) -> None:
        self._handler = handler
        self._token_cache = token_cache

    @property
    def service_url(self) -> str:
        return self._handler.config.url

    async def authenticate(
        self,
        method: EnumAuthMethod,
        source: ProtocolCredentialSource,
        cache_policy: ModelCachePolicy,
        auth_mount: str | None = None,
        correlation_id: UUID | None = None,
    ) -> ModelAuthSession:
        """Produce a session for ``method``.

        The principal is requested before the cache lookup; the password or
        token only when it is actually needed.

        Args:
            method: Auth method to use
            source: Where the username and password/token come from
            cache_policy: Whether to read and/or write the token cache
            auth_mount: Auth mount path; defaults to the method name
            correlation_id: Correlation ID for tracing

        Raises:
            AuthInvalidCredentialsError: Vault rejected the credentials
            AuthServiceUnreachableError: Vault could not be reached
            AuthMalformedResponseError: The login response had no token
        """
        correlation_id = correlation_id or uuid4()

        if method is EnumAuthMethod.TOKEN:
            credentials = build_credentials(method, "", source.get_secret_credential())
            return await self.login(credentials, cache_policy, correlation_id)

        principal = source.get_principal()
        if not principal:
            raise AuthInvalidCredentialsError(
                f"A username is required for {method.value} login",
                context=ModelErrorContext(
                    operation=f"login_{method.value}",
                    correlation_id=correlation_id,
                ),
            )

        if cache_policy.read and self._token_cache is not None:
            cached = self._token_cache.get(self.service_url, method, principal)
            if cached is not None:
                logger.info(
                    "Reusing cached Vault token",
                    extra={
                        "auth_method": method.value,
                        "principal": principal,
                        "expires_at": str(cached.expires_at),
                        "correlation_id": str(correlation_id),
                    },
                )
                return ModelAuthSession(
                    token=cached.token,
                    expires_at=cached.expires_at,
                    method=method,
                    principal=principal,
                    from_cache=True,
                )

        credentials = build_credentials(
            method, principal, source.get_secret_credential(), auth_mount
        )
        return await self.login(credentials, cache_policy, correlation_id)

    async def login(
        self,
        credentials: AuthCredentials,
        cache_policy: ModelCachePolicy,
        correlation_id: UUID | None = None,
    ) -> ModelAuthSession:
        """Turn ready-made credentials into a session, skipping the cache read.

        A static token becomes a session as-is and never touches the cache.
        Userpass and LDAP credentials log in, and the new token is cached if
        ``cache_policy.write`` is set.
        """
        correlation_id = correlation_id or uuid4()

        if isinstance(credentials, ModelTokenCredentials):
            logger.debug(
                "Using static token",
                extra={"correlation_id": str(correlation_id)},
            )
            return ModelAuthSession(token=credentials.token, method=credentials.method)

        response = await self._login(credentials, correlation_id)
        session = self._session_from_response(response, credentials, correlation_id)

        logger.info(
            "Logged in to Vault",
            extra={
                "auth_method": credentials.method.value,
                "principal": credentials.principal,
                "expires_at": str(session.expires_at),
                "correlation_id": str(correlation_id),
            },
        )

        if cache_policy.write and self._token_cache is not None:
            self._token_cache.put(
                ModelCacheEntry(
                    service_url=self.service_url,
                    auth_method=session.method,
                    principal=session.principal,
                    token=session.token,
                    expires_at=session.expires_at,
                )
            )
            self._token_cache.save()

        return session

    async def _login(
        self,
        credentials: ModelUserPassCredentials | ModelLdapCredentials,
        correlation_id: UUID,
    ) -> dict[str, object]:
        """Dispatch the login request and translate transport errors."""
        context = ModelErrorContext(
            operation=f"login_{credentials.method.value}",
            target_name=f"auth/{credentials.auth_mount}",
            correlation_id=correlation_id,
        )
        try:
            if isinstance(credentials, ModelLdapCredentials):
                return await self._handler.login_ldap(
                    credentials.username,
                    credentials.password,
                    credentials.auth_mount,
                    correlation_id,
                )
            return await self._handler.login_userpass(
                credentials.username,
                credentials.password,
                credentials.auth_mount,
                correlation_id,
            )
        except (VaultInvalidRequestError, VaultForbiddenError) as e:
            raise AuthInvalidCredentialsError(
                f"Vault rejected the {credentials.method.value} credentials "
                f"for '{credentials.principal}'",
                context=context,
            ) from e
        except VaultInvalidPathError as e:
            raise AuthInvalidCredentialsError(
                f"No {credentials.method.value} login is mounted at "
                f"'auth/{credentials.auth_mount}' (see --auth-path)",
                context=context,
            ) from e
        except VaultTransportError as e:
            raise AuthServiceUnreachableError(
                f"Could not complete {credentials.method.value} login request "
                f"to Vault: {e}",
                context=context,
            ) from e

    def _session_from_response(
        self,
        response: dict[str, object],
        credentials: ModelUserPassCredentials | ModelLdapCredentials,
        correlation_id: UUID,
    ) -> ModelAuthSession:
        """Extract token and lease from a login response."""
        context = ModelErrorContext(
            operation=f"login_{credentials.method.value}",
            target_name=f"auth/{credentials.auth_mount}",
            correlation_id=correlation_id,
        )
        auth = response.get("auth") if isinstance(response, dict) else None
        token = auth.get("client_token") if isinstance(auth, dict) else None
        if not isinstance(token, str) or not token:
            raise AuthMalformedResponseError(
                f"Could not find the client token in the {credentials.method.value} "
                "login response",
                context=context,
            )

        lease = auth.get("lease_duration") if isinstance(auth, dict) else None
        expires_at: datetime | None = None
        if isinstance(lease, int) and not isinstance(lease, bool) and lease > 0:
            expires_at = datetime.now(UTC) + timedelta(seconds=lease)

        return ModelAuthSession(
            token=SecretStr(token),
            expires_at=expires_at,
            method=credentials.method,
            principal=credentials.principal,
        )


__all__ = ["Authenticator", "build_credentials"]
