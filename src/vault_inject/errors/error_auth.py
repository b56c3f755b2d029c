# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Authentication Error Classes.

Raised by the Authenticator. All are terminal for the invocation.
"""

from vault_inject.enums.enum_exit_code import EnumExitCode
from vault_inject.errors.error_inject import VaultInjectError


class AuthError(VaultInjectError):
    """Base class for login failures."""

    exit_code = EnumExitCode.AUTH


class AuthInvalidCredentialsError(AuthError):
    """Vault rejected the supplied username/password.

    Example:
        >>> context = ModelErrorContext(operation="login", target_name="ldap")
        >>> raise AuthInvalidCredentialsError(
        ...     "Vault rejected the LDAP credentials",
        ...     context=context,
        ...     principal="alice",
        ... )
    """


class AuthServiceUnreachableError(AuthError):
    """Vault could not be reached (connection refused, DNS, timeout, sealed)."""


class AuthMalformedResponseError(AuthError):
    """The login response did not contain a client token."""


__all__ = [
    "AuthError",
    "AuthInvalidCredentialsError",
    "AuthMalformedResponseError",
    "AuthServiceUnreachableError",
]
