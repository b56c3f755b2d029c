# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Base Error Classes.

Error Hierarchy:
    VaultInjectError (base error, carries exit code + structured context)
    ├── ConfigurationError
    ├── AuthError                  (error_auth)
    ├── MountError                 (error_mount)
    ├── TemplateError              (error_template)
    ├── FetchError                 (error_fetch)
    ├── PipelineError              (error_pipeline)
    ├── OrchestratorError          (error_orchestrator)
    └── ExecError                  (error_exec)

All errors:
    - Support proper error chaining with ``raise ... from e``
    - Accept ModelErrorContext for bundled context parameters
    - Accept arbitrary extra context keyword arguments
    - Map to a distinct process exit status via ``exit_code``
"""

from __future__ import annotations

from vault_inject.enums.enum_exit_code import EnumExitCode
from vault_inject.errors.model_error_context import ModelErrorContext


class VaultInjectError(Exception):
    """Base class for every error vault-inject reports to the user.

    Structured Fields (via ModelErrorContext):
        operation: Operation being performed
        target_name: Target resource/endpoint name
        secret_spec: Secret mapping being resolved
        secret_path: Concrete secret path involved
        stage_index: Filter stage index
        correlation_id: Invocation correlation ID

    Example:
        >>> context = ModelErrorContext(operation="login", target_name="userpass")
        >>> raise VaultInjectError("Operation failed", context=context)
    """

    exit_code: EnumExitCode = EnumExitCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        context: ModelErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        """Initialize VaultInjectError with structured fields.

        Args:
            message: Human-readable error message
            context: Bundled error context
            **extra_context: Additional context information
        """
        super().__init__(message)
        self.message = message
        self.context = context
        self.extra_context: dict[str, object] = dict(extra_context)

    @property
    def structured_context(self) -> dict[str, object]:
        """Context model fields that are set, merged with extra context."""
        merged: dict[str, object] = {}
        if self.context is not None:
            merged.update(self.context.model_dump(exclude_none=True))
        merged.update(self.extra_context)
        return merged

    def describe(self) -> str:
        """Render the message plus context as a multi-line diagnostic."""
        lines = [self.message]
        for key, value in self.structured_context.items():
            if key == "correlation_id":
                continue
            lines.append(f"  {key}: {value}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.message


class ConfigurationError(VaultInjectError):
    """Raised when invocation options are missing or invalid.

    Example:
        >>> raise ConfigurationError("One or more '--secret' mappings are required")
    """

    exit_code = EnumExitCode.USAGE


__all__ = ["ConfigurationError", "VaultInjectError"]
