# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""vault-inject Protocols Module.

Exports:
    ProtocolCredentialSource: Supplies principal and password/token on demand
    StaticCredentialSource: Fixed-value implementation
"""

from vault_inject.protocols.protocol_credential_source import (
    ProtocolCredentialSource,
    StaticCredentialSource,
)

__all__: list[str] = ["ProtocolCredentialSource", "StaticCredentialSource"]
