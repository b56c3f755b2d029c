# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Vault Transport Error Classes.

These are raised by VaultHandler and describe what went wrong talking to
Vault, independent of why the call was made. The Authenticator, MountResolver
and SecretFetcher translate them into their own domain errors with
``raise ... from e`` so the user sees e.g. "invalid credentials" rather than
"invalid request".

Hierarchy:
    VaultTransportError (connection failures, Vault down or sealed)
    ├── VaultTimeoutError
    ├── VaultForbiddenError (403 / permission denied)
    ├── VaultInvalidPathError (404)
    ├── VaultInvalidRequestError (400, e.g. bad login credentials)
    └── VaultResponseError (unexpected response shape or other Vault error)
"""

from vault_inject.errors.error_inject import VaultInjectError


class VaultTransportError(VaultInjectError):
    """Error communicating with Vault.

    Example:
        >>> context = ModelErrorContext(
        ...     operation="read_secret",
        ...     target_name="https://vault.example.com",
        ... )
        >>> raise VaultTransportError(
        ...     "Failed to connect to Vault",
        ...     context=context,
        ...     error_type="ConnectionError",
        ... )
    """


class VaultTimeoutError(VaultTransportError):
    """A Vault call did not complete within the configured timeout."""


class VaultForbiddenError(VaultTransportError):
    """Vault refused the request with a permission error."""


class VaultInvalidPathError(VaultTransportError):
    """Nothing exists at the requested Vault path."""


class VaultInvalidRequestError(VaultTransportError):
    """Vault rejected the request as invalid."""


class VaultResponseError(VaultTransportError):
    """Vault answered, but with an error or an unexpected payload."""


__all__ = [
    "VaultForbiddenError",
    "VaultInvalidPathError",
    "VaultInvalidRequestError",
    "VaultResponseError",
    "VaultTimeoutError",
    "VaultTransportError",
]
