# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Vault Authentication Method Enumeration."""

from enum import Enum


class EnumAuthMethod(str, Enum):
    """Authentication methods supported when logging in to Vault.

    Attributes:
        USERPASS: Username/password auth backend
        LDAP: LDAP auth backend
        TOKEN: A pre-issued Vault token, no login request
    """

    USERPASS = "userpass"
    LDAP = "ldap"
    TOKEN = "token"

    @classmethod
    def parse(cls, value: str) -> "EnumAuthMethod":
        """Parse a user supplied auth type, accepting the common aliases.

        Raises:
            ValueError: If the value names no known method.
        """
        normalized = value.strip().lower()
        if normalized in _USERPASS_ALIASES:
            return cls.USERPASS
        if normalized == "ldap":
            return cls.LDAP
        if normalized == "token":
            return cls.TOKEN
        raise ValueError(
            f"'{value}' is not a valid authentication type "
            "(try 'userpass', 'ldap' or 'token')."
        )

    @property
    def default_mount(self) -> str:
        """Auth mount used when no ``--auth-path`` is given."""
        return self.value


_USERPASS_ALIASES: frozenset[str] = frozenset(
    {"userpass", "user-pass", "username-password", "username", "user"}
)


__all__ = ["EnumAuthMethod"]
