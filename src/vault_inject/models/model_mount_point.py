# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Mounted Secret Engine Model."""

from pydantic import BaseModel, ConfigDict, Field

from vault_inject.enums import EnumEngineKind


class ModelMountPoint(BaseModel):
    """A secret engine mounted at a path prefix.

    Attributes:
        path_prefix: Mount path without leading/trailing ``/`` (e.g. ``secret``)
        engine_kind: Kind of engine mounted there
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    path_prefix: str = Field(min_length=1)
    engine_kind: EnumEngineKind

    def owns(self, path: str) -> bool:
        """Whether ``path`` lives under this mount (on a ``/`` boundary)."""
        return path == self.path_prefix or path.startswith(self.path_prefix + "/")


__all__ = ["ModelMountPoint"]
