# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Mount Table Model.

The set of readable secret engines discovered for one invocation, with
longest-prefix lookup from a secret path to the engine that owns it.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from vault_inject.models.model_mount_point import ModelMountPoint


class ModelMountTable(BaseModel):
    """Immutable table of discovered mounts.

    Example:
        >>> kv2 = EnumEngineKind.KV2
        >>> table = ModelMountTable(mounts=(
        ...     ModelMountPoint(path_prefix="secret", engine_kind=kv2),
        ...     ModelMountPoint(path_prefix="secret/team", engine_kind=kv2),
        ... ))
        >>> mount, rest = table.resolve("secret/team/db")
        >>> mount.path_prefix, rest
        ('secret/team', 'db')
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    mounts: tuple[ModelMountPoint, ...] = Field(default=())

    def resolve(self, path: str) -> tuple[ModelMountPoint, str] | None:
        """Find the mount owning ``path`` and the path relative to it.

        Returns:
            ``(mount, remainder)`` for the longest matching prefix, or None.
        """
        path = path.strip("/")
        best: ModelMountPoint | None = None
        for mount in self.mounts:
            if mount.owns(path) and (
                best is None or len(mount.path_prefix) > len(best.path_prefix)
            ):
                best = mount
        if best is None:
            return None
        return best, path[len(best.path_prefix) :].strip("/")


__all__ = ["ModelMountTable"]
