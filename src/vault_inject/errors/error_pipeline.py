# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Value Pipeline Error Classes."""

from vault_inject.enums.enum_exit_code import EnumExitCode
from vault_inject.errors.error_inject import VaultInjectError
from vault_inject.errors.model_error_context import ModelErrorContext


class PipelineError(VaultInjectError):
    """Base class for filter pipeline failures."""

    exit_code = EnumExitCode.PIPELINE


class PipelineStageFailedError(PipelineError):
    """A filter command could not be run or exited non-zero.

    Attributes:
        stage_index: Zero-based index of the failing stage
        status: Exit status of the stage (None if it could not be spawned)
    """

    def __init__(
        self,
        message: str,
        stage_index: int,
        status: int | None,
        context: ModelErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(message, context=context, status=status, **extra_context)
        self.stage_index = stage_index
        self.status = status


__all__ = ["PipelineError", "PipelineStageFailedError"]
