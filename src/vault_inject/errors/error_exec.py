# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Command Execution Error Class."""

from vault_inject.enums.enum_exit_code import EnumExitCode
from vault_inject.errors.error_inject import VaultInjectError


class ExecError(VaultInjectError):
    """Raised when the main command cannot be spawned.

    A command that runs and exits non-zero is not an ExecError; its status is
    propagated as the tool's own exit status.
    """

    exit_code = EnumExitCode.EXEC


__all__ = ["ExecError"]
