# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Error Context Model.

Bundles the structured fields shared by every vault-inject error so error
constructors stay short while diagnostics still say which secret spec, path
or pipeline stage failed.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ModelErrorContext(BaseModel):
    """Structured context attached to vault-inject errors.

    Attributes:
        operation: Operation being performed (login, list_mounts, read_secret, ...)
        target_name: Target resource (Vault URL, mount, command line)
        secret_spec: The ``--secret`` mapping being resolved, as typed by the user
        secret_path: Concrete secret path involved
        stage_index: Zero-based filter stage index for pipeline failures
        correlation_id: Invocation correlation ID for log correlation

    Example:
        >>> context = ModelErrorContext(
        ...     operation="read_secret",
        ...     secret_path="secret/foo/bar",
        ...     correlation_id=uuid4(),
        ... )
        >>> raise FetchNotFoundError("No secret found", context=context)
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    operation: str | None = Field(
        default=None,
        description="Operation being performed",
    )
    target_name: str | None = Field(
        default=None,
        description="Target resource or endpoint name",
    )
    secret_spec: str | None = Field(
        default=None,
        description="Secret mapping being resolved",
    )
    secret_path: str | None = Field(
        default=None,
        description="Concrete secret path involved",
    )
    stage_index: int | None = Field(
        default=None,
        ge=0,
        description="Zero-based filter stage index",
    )
    correlation_id: UUID | None = Field(
        default=None,
        description="Invocation correlation ID",
    )


__all__ = ["ModelErrorContext"]
