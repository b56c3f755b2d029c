# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""vault-inject - Inject Vault secrets into commands.

Authenticates to HashiCorp Vault, resolves templated ``--secret`` mappings
against the mounted KV2 and Cubbyhole engines, optionally pipes each value
through filter commands, and runs a command with the results exposed as
environment variables.

Key Components:
    - Authenticator: userpass / ldap / token login with an on-disk token cache
    - MountResolver: discovers which secret engines are mounted where
    - Template: placeholder matching and substitution for secret keys and names
    - SecretFetcher: reads KV2 and Cubbyhole documents
    - ValuePipeline: runs values through ``| filter`` commands
    - ResolutionOrchestrator: ties the above together into an environment map
    - ExecutionStage: runs ``--each`` and the main command
"""

__version__ = "0.4.0"

__all__: list[str] = ["__version__"]
