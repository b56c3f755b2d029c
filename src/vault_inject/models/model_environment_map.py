# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Environment Map Model.

The ordered result of a resolution run. Iteration order is discovery order:
spec order first, then key order within each secret document.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from vault_inject.models.model_resolved_secret import ModelResolvedSecret


class ModelEnvironmentMap(BaseModel):
    """Resolved secrets, unique by environment variable name."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    secrets: tuple[ModelResolvedSecret, ...] = Field(default=())

    @model_validator(mode="after")
    def _check_unique_names(self) -> ModelEnvironmentMap:
        names = [secret.env_name for secret in self.secrets]
        if len(names) != len(set(names)):
            raise ValueError("environment variable names must be unique")
        return self

    def as_env(self) -> dict[str, str]:
        """Name to final value, in discovery order."""
        return {
            secret.env_name: secret.final_value.get_secret_value()
            for secret in self.secrets
        }

    @property
    def names(self) -> list[str]:
        return [secret.env_name for secret in self.secrets]


__all__ = ["ModelEnvironmentMap"]
