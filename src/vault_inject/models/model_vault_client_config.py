# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Vault Client Configuration Model.

Security Note:
    No credentials live in this model. Tokens and passwords travel in the
    credential models and the auth session, both as SecretStr.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ModelVaultClientConfig(BaseModel):
    """Configuration for talking to Vault.

    Attributes:
        url: Vault server URL (e.g. "https://vault.example.com:8200")
        namespace: Vault namespace for Vault Enterprise (optional)
        timeout_seconds: Per-request timeout in seconds (1.0-300.0, default 30.0)
        verify_ssl: Whether to verify SSL certificates (default True)
        max_concurrent_operations: Thread pool size for Vault calls (1-100)

    Example:
        >>> config = ModelVaultClientConfig(
        ...     url="https://vault.example.com:8200",
        ...     timeout_seconds=10.0,
        ... )
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    url: str = Field(
        min_length=1,
        description="Vault server URL (e.g., 'https://vault.example.com:8200')",
    )
    namespace: str | None = Field(
        default=None,
        description="Vault namespace for Vault Enterprise",
    )
    timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="Request timeout in seconds",
    )
    verify_ssl: bool = Field(
        default=True,
        description="Whether to verify SSL certificates",
    )
    max_concurrent_operations: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum concurrent Vault operations (thread pool size)",
    )

    @field_validator("url")
    @classmethod
    def _validate_url(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError("url must start with http:// or https://")
        return value.rstrip("/")


__all__ = ["ModelVaultClientConfig"]
