# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Transport handlers.

Exports:
    VaultHandler: hvac client driven from asyncio through a bounded thread pool
"""

from vault_inject.handlers.handler_vault import VaultHandler

__all__: list[str] = ["VaultHandler"]
