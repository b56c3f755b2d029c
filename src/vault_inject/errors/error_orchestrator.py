# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Resolution Orchestrator Error Classes."""

from vault_inject.enums.enum_exit_code import EnumExitCode
from vault_inject.errors.error_inject import VaultInjectError


class OrchestratorError(VaultInjectError):
    """Base class for aggregation failures."""

    exit_code = EnumExitCode.NAME_COLLISION


class OrchestratorNameCollisionError(OrchestratorError):
    """Two resolved secrets want the same environment variable name.

    Example:
        >>> raise OrchestratorNameCollisionError(
        ...     "Environment variable 'X' would be set by more than one secret",
        ...     env_name="X",
        ...     first_path="secret/a/x",
        ...     second_path="secret/b/x",
        ... )
    """

    def __init__(self, message: str, env_name: str, **extra_context: object):
        super().__init__(message, env_name=env_name, **extra_context)
        self.env_name = env_name


__all__ = ["OrchestratorError", "OrchestratorNameCollisionError"]
