# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Secret Engine Kind Enumeration.

Classifies the secret engines reported by Vault's mount listing into the
kinds this tool knows how to read.
"""

from __future__ import annotations

from enum import Enum


class EnumEngineKind(str, Enum):
    """Secret engine kinds that can be read.

    Attributes:
        KV2: Versioned key/value engine; reads return the latest version
        CUBBYHOLE: Per-token, non-versioned key/value store
    """

    KV2 = "kv2"
    CUBBYHOLE = "cubbyhole"

    @classmethod
    def classify(
        cls, mount_type: str, options: dict[str, object] | None
    ) -> EnumEngineKind | None:
        """Map a mount's declared type to an engine kind.

        Returns None for unsupported engines (including KV version 1).
        """
        if mount_type == "cubbyhole":
            return cls.CUBBYHOLE
        if mount_type == "kv":
            version = (options or {}).get("version")
            if str(version) == "2":
                return cls.KV2
        return None


__all__ = ["EnumEngineKind"]
