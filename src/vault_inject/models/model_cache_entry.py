# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Token Cache Entry Models.

On-disk form of the token cache. Tokens are SecretStr in memory and written
out in clear only when serialising to JSON for the cache file itself.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_serializer

from vault_inject.enums import EnumAuthMethod

CACHE_FILE_VERSION: int = 1


class ModelCacheEntry(BaseModel):
    """A cached token for one (service URL, auth method, principal).

    Attributes:
        service_url: Vault URL the token was issued by
        auth_method: Method used to log in
        principal: Username logged in as
        token: The cached client token
        expires_at: End of the token's lease; None if it does not expire
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    service_url: str
    auth_method: EnumAuthMethod
    principal: str
    token: SecretStr
    expires_at: datetime | None = None

    @field_serializer("token", when_used="json")
    def _dump_token(self, token: SecretStr) -> str:
        return token.get_secret_value()

    @property
    def key(self) -> tuple[str, EnumAuthMethod, str]:
        return (self.service_url, self.auth_method, self.principal)

    def is_expired(self, now: datetime | None = None) -> bool:
        """Whether the lease has ended. Entries without expiry never expire."""
        if self.expires_at is None:
            return False
        now = now or datetime.now(UTC)
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        return expires_at <= now


class ModelTokenCacheFile(BaseModel):
    """Top-level structure of the cache file."""

    model_config = ConfigDict(extra="ignore")

    version: int = Field(default=CACHE_FILE_VERSION)
    entries: list[ModelCacheEntry] = Field(default_factory=list)


__all__ = ["CACHE_FILE_VERSION", "ModelCacheEntry", "ModelTokenCacheFile"]
