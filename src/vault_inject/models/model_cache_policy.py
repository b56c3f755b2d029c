# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Token Cache Policy Model."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class ModelCachePolicy(BaseModel):
    """Controls whether the token cache is consulted and updated.

    Attributes:
        read: Reuse a cached, unexpired token instead of logging in
        write: Store the token from a fresh login
        cache_file: Cache file location; None means the default location
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    read: bool = Field(default=True)
    write: bool = Field(default=True)
    cache_file: Path | None = Field(default=None)


__all__ = ["ModelCachePolicy"]
