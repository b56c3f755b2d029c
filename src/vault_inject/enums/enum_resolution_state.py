# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Resolution Orchestrator State Enumeration."""

from enum import Enum


class EnumResolutionState(str, Enum):
    """States of one resolution run.

    START -> AUTHENTICATED -> MOUNTS_DISCOVERED -> RESOLVING -> FETCHING
    -> AGGREGATED -> DONE, with FAILED reachable from any state.
    """

    START = "start"
    AUTHENTICATED = "authenticated"
    MOUNTS_DISCOVERED = "mounts_discovered"
    RESOLVING = "resolving"
    FETCHING = "fetching"
    AGGREGATED = "aggregated"
    DONE = "done"
    FAILED = "failed"


__all__ = ["EnumResolutionState"]
