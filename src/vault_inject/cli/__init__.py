# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""vault-inject command line interface."""

from vault_inject.cli.commands import cli, main

__all__: list[str] = ["cli", "main"]
