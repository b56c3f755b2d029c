# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""vault-inject Models Module.

Exports:
    ModelSecretSpec: One parsed ``--secret`` mapping
    ModelMountPoint / ModelMountTable: Discovered secret engines
    ModelUserPassCredentials / ModelLdapCredentials / ModelTokenCredentials:
        Credentials per auth method (discriminated by ``method``)
    ModelAuthSession: Token in use for this invocation
    ModelCachePolicy: Token cache read/write gating
    ModelCacheEntry / ModelTokenCacheFile: On-disk token cache
    ModelFetchRequest: Matched key awaiting fetch
    ModelResolvedSecret: Fetched and filtered secret
    ModelEnvironmentMap: Ordered resolution result
    ModelVaultClientConfig: Vault connection settings
"""

from vault_inject.models.model_auth_credentials import (
    AuthCredentials,
    ModelLdapCredentials,
    ModelTokenCredentials,
    ModelUserPassCredentials,
)
from vault_inject.models.model_auth_session import ModelAuthSession
from vault_inject.models.model_cache_entry import (
    CACHE_FILE_VERSION,
    ModelCacheEntry,
    ModelTokenCacheFile,
)
from vault_inject.models.model_cache_policy import ModelCachePolicy
from vault_inject.models.model_environment_map import ModelEnvironmentMap
from vault_inject.models.model_fetch_request import ModelFetchRequest
from vault_inject.models.model_mount_point import ModelMountPoint
from vault_inject.models.model_mount_table import ModelMountTable
from vault_inject.models.model_resolved_secret import ModelResolvedSecret
from vault_inject.models.model_secret_spec import ModelSecretSpec
from vault_inject.models.model_vault_client_config import ModelVaultClientConfig

__all__: list[str] = [
    "AuthCredentials",
    "CACHE_FILE_VERSION",
    "ModelAuthSession",
    "ModelCacheEntry",
    "ModelCachePolicy",
    "ModelEnvironmentMap",
    "ModelFetchRequest",
    "ModelLdapCredentials",
    "ModelMountPoint",
    "ModelMountTable",
    "ModelResolvedSecret",
    "ModelSecretSpec",
    "ModelTokenCacheFile",
    "ModelTokenCredentials",
    "ModelUserPassCredentials",
    "ModelVaultClientConfig",
]
