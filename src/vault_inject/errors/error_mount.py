# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Mount Discovery Error Class."""

from vault_inject.enums.enum_exit_code import EnumExitCode
from vault_inject.errors.error_inject import VaultInjectError


class MountError(VaultInjectError):
    """Raised when the mounted secret engines cannot be listed.

    Example:
        >>> context = ModelErrorContext(operation="list_mounts")
        >>> raise MountError(
        ...     "Failed to get secret store information from Vault",
        ...     context=context,
        ... )
    """

    exit_code = EnumExitCode.MOUNT


__all__ = ["MountError"]
