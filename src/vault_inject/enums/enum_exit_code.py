# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Process Exit Code Enumeration.

Each failure category exits with its own status so callers can tell them
apart from the wrapped command's own exit status.
"""

from enum import IntEnum


class EnumExitCode(IntEnum):
    """Exit statuses returned by the ``vault-inject`` CLI."""

    SUCCESS = 0
    INTERNAL_ERROR = 1
    USAGE = 2
    AUTH = 3
    MOUNT = 4
    TEMPLATE = 5
    FETCH = 6
    PIPELINE = 7
    NAME_COLLISION = 8
    EXEC = 9


__all__ = ["EnumExitCode"]
