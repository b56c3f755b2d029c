# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Authenticated Session Model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from vault_inject.enums import EnumAuthMethod


class ModelAuthSession(BaseModel):
    """A Vault token ready to use for this invocation.

    Attributes:
        token: Vault client token (SecretStr so it never lands in logs)
        expires_at: When the token's lease ends; None if it does not expire
            or is not tracked (static tokens)
        method: Auth method that produced the token
        principal: Username the token was issued to (empty for static tokens)
        from_cache: True if the token came from the token cache
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    token: SecretStr
    expires_at: datetime | None = None
    method: EnumAuthMethod
    principal: str = ""
    from_cache: bool = Field(default=False)


__all__ = ["ModelAuthSession"]
