# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""vault-inject Errors Module.

Exports:
    ModelErrorContext: Configuration model for bundled error context
    VaultInjectError: Base error class (carries ``exit_code``)
    ConfigurationError: Invalid or missing invocation options
    AuthError and subclasses: Login failures
    MountError: Secret engine discovery failure
    TemplateError and subclasses: Template / ``--secret`` mapping errors
    FetchError and subclasses: Secret read failures
    PipelineError and subclasses: Filter command failures
    OrchestratorError and subclasses: Aggregation failures (name collisions)
    ExecError: Main command spawn failure
    VaultTransportError and subclasses: Raw Vault communication failures

Error Sanitization Guidelines:
    NEVER include in error messages or context:
        - Secret values
        - Vault tokens or passwords

    SAFE to include:
        - Secret paths and key names
        - Environment variable names
        - Usernames (principals) and auth mounts
        - Filter command lines and exit statuses

    Example - BAD (exposes a secret)::

        raise PipelineStageFailedError(f"'rev' failed on {value}", ...)

    Example - GOOD::

        raise PipelineStageFailedError(
            "The command 'rev' failed",
            stage_index=1,
            status=2,
            context=context,
        )
"""

from vault_inject.errors.error_auth import (
    AuthError,
    AuthInvalidCredentialsError,
    AuthMalformedResponseError,
    AuthServiceUnreachableError,
)
from vault_inject.errors.error_exec import ExecError
from vault_inject.errors.error_fetch import (
    FetchError,
    FetchNotFoundError,
    FetchPermissionDeniedError,
    FetchServiceError,
    FetchUnknownMountError,
)
from vault_inject.errors.error_inject import ConfigurationError, VaultInjectError
from vault_inject.errors.error_mount import MountError
from vault_inject.errors.error_orchestrator import (
    OrchestratorError,
    OrchestratorNameCollisionError,
)
from vault_inject.errors.error_pipeline import PipelineError, PipelineStageFailedError
from vault_inject.errors.error_template import (
    SecretSpecParseError,
    TemplateError,
    TemplateSyntaxError,
    TemplateUnboundPlaceholderError,
)
from vault_inject.errors.error_vault import (
    VaultForbiddenError,
    VaultInvalidPathError,
    VaultInvalidRequestError,
    VaultResponseError,
    VaultTimeoutError,
    VaultTransportError,
)
from vault_inject.errors.model_error_context import ModelErrorContext

__all__: list[str] = [
    # Configuration model
    "ModelErrorContext",
    # Base
    "VaultInjectError",
    "ConfigurationError",
    # Domain errors
    "AuthError",
    "AuthInvalidCredentialsError",
    "AuthMalformedResponseError",
    "AuthServiceUnreachableError",
    "MountError",
    "TemplateError",
    "TemplateSyntaxError",
    "SecretSpecParseError",
    "TemplateUnboundPlaceholderError",
    "FetchError",
    "FetchUnknownMountError",
    "FetchNotFoundError",
    "FetchPermissionDeniedError",
    "FetchServiceError",
    "PipelineError",
    "PipelineStageFailedError",
    "OrchestratorError",
    "OrchestratorNameCollisionError",
    "ExecError",
    # Transport errors
    "VaultTransportError",
    "VaultTimeoutError",
    "VaultForbiddenError",
    "VaultInvalidPathError",
    "VaultInvalidRequestError",
    "VaultResponseError",
]
