# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol for Credential Sources.

The Authenticator asks for credentials only when it needs them: the
principal to look up a cached token, and the secret credential (password or
token) only when it actually has to log in. Sources may therefore prompt
interactively without bothering users whose token is still cached.

Example:
    >>> source = StaticCredentialSource(principal="alice", secret="hunter2")
    >>> session = await authenticator.authenticate(
    ...     EnumAuthMethod.USERPASS, source, ModelCachePolicy()
    ... )
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import SecretStr


@runtime_checkable
class ProtocolCredentialSource(Protocol):
    """Supplies the two values a login attempt needs.

    Methods:
        get_principal: Username to log in as
        get_secret_credential: Password (userpass/ldap) or token (token auth)
    """

    def get_principal(self) -> str:
        """Return the username to log in as."""
        ...

    def get_secret_credential(self) -> SecretStr:
        """Return the password or token."""
        ...


class StaticCredentialSource:
    """Credential source with fixed values, for callers that already have them."""

    def __init__(self, principal: str = "", secret: str | SecretStr = "") -> None:
        self._principal = principal
        self._secret = secret if isinstance(secret, SecretStr) else SecretStr(secret)

    def get_principal(self) -> str:
        return self._principal

    def get_secret_credential(self) -> SecretStr:
        return self._secret


__all__ = ["ProtocolCredentialSource", "StaticCredentialSource"]
