# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Resolved Secret Model."""

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class ModelResolvedSecret(BaseModel):
    """One environment variable produced by matching, fetching and filtering.

    Attributes:
        env_name: Environment variable name (placeholders substituted)
        raw_value: Value as read from Vault
        final_value: Value after the filter pipeline
        origin_path: ``document/key`` the value was read from
        discovery_index: Position in discovery order (spec order, then key order)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    env_name: str = Field(min_length=1)
    raw_value: SecretStr
    final_value: SecretStr
    origin_path: str
    discovery_index: int = Field(ge=0)


__all__ = ["ModelResolvedSecret"]
