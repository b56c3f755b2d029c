# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""vault-inject Enumerations Module.

Exports:
    EnumAuthMethod: Vault authentication method (userpass, ldap, token)
    EnumEngineKind: Readable secret engine kind (KV2, Cubbyhole)
    EnumExitCode: CLI exit status per failure category
    EnumResolutionState: Resolution orchestrator state machine states
"""

from vault_inject.enums.enum_auth_method import EnumAuthMethod
from vault_inject.enums.enum_engine_kind import EnumEngineKind
from vault_inject.enums.enum_exit_code import EnumExitCode
from vault_inject.enums.enum_resolution_state import EnumResolutionState

__all__: list[str] = [
    "EnumAuthMethod",
    "EnumEngineKind",
    "EnumExitCode",
    "EnumResolutionState",
]
