# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""vault-inject Services Module.

Exports:
    Authenticator: Login with token cache reuse
    TokenCache: On-disk token cache
    MountResolver: Secret engine discovery
    SecretFetcher: Document reads with per-invocation memoization
    ValuePipeline: ``| command`` filter execution
"""

from vault_inject.services.authenticator import Authenticator, build_credentials
from vault_inject.services.mount_resolver import MountResolver
from vault_inject.services.secret_fetcher import SecretFetcher, render_value
from vault_inject.services.token_cache import TokenCache, default_cache_file
from vault_inject.services.value_pipeline import ValuePipeline, trim_trailing_newline

__all__: list[str] = [
    "Authenticator",
    "MountResolver",
    "SecretFetcher",
    "TokenCache",
    "ValuePipeline",
    "build_credentials",
    "default_cache_file",
    "render_value",
    "trim_trailing_newline",
]
