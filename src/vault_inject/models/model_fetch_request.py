# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Concrete Fetch Request Model."""

from pydantic import BaseModel, ConfigDict, Field

from vault_inject.models.model_secret_spec import ModelSecretSpec


class ModelFetchRequest(BaseModel):
    """A matched key waiting to be fetched and filtered.

    Attributes:
        spec: Mapping the key was matched by
        key: Concrete key within the mapping's document
        env_name: Environment variable name for the key
        discovery_index: Position in discovery order
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    spec: ModelSecretSpec
    key: str = Field(min_length=1)
    env_name: str = Field(min_length=1)
    discovery_index: int = Field(ge=0)

    @property
    def origin_path(self) -> str:
        """``document/key``, for messages and logs only."""
        return f"{self.spec.document_path}/{self.key}"


__all__ = ["ModelFetchRequest"]
