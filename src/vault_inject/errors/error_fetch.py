# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Secret Fetch Error Classes.

Raised by the SecretFetcher when a document or key cannot be read.
"""

from vault_inject.enums.enum_exit_code import EnumExitCode
from vault_inject.errors.error_inject import VaultInjectError


class FetchError(VaultInjectError):
    """Base class for secret read failures."""

    exit_code = EnumExitCode.FETCH


class FetchUnknownMountError(FetchError):
    """No supported secret engine is mounted at the requested path.

    Example:
        >>> raise FetchUnknownMountError(
        ...     "The path '/kv1/foo' is not supported "
        ...     "(no known secret storage is mounted here)",
        ...     secret_path="kv1/foo",
        ... )
    """


class FetchNotFoundError(FetchError):
    """The secret document or key does not exist."""


class FetchPermissionDeniedError(FetchError):
    """The session token is not allowed to read the path."""


class FetchServiceError(FetchError):
    """Vault failed or returned something unusable."""


__all__ = [
    "FetchError",
    "FetchNotFoundError",
    "FetchPermissionDeniedError",
    "FetchServiceError",
    "FetchUnknownMountError",
]
