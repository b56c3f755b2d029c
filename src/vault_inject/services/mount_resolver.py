# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Secret Engine Mount Discovery.

Asks Vault which secret engines are mounted where, once per invocation, so
users can write plain paths like ``/secret/foo/bar/key`` instead of declaring
the engine type in every path. Engines other than KV v2 and Cubbyhole are
left out of the table; paths under them never resolve.
"""

from __future__ import annotations

import logging
from uuid import UUID, uuid4

from vault_inject.enums import EnumEngineKind
from vault_inject.errors import ModelErrorContext, MountError, VaultTransportError
from vault_inject.handlers import VaultHandler
from vault_inject.models import ModelMountPoint, ModelMountTable

logger = logging.getLogger(__name__)


class MountResolver:
    """Builds the mount table from Vault's mount listing."""

    def __init__(self, handler: VaultHandler) -> None:
        self._handler = handler

    async def discover(self, correlation_id: UUID | None = None) -> ModelMountTable:
        """Query the mounted secret engines.

        Raises:
            MountError: If the listing fails or is not understood.
        """
        correlation_id = correlation_id or uuid4()
        context = ModelErrorContext(
            operation="list_mounts",
            target_name=self._handler.config.url,
            correlation_id=correlation_id,
        )
        try:
            listing = await self._handler.list_secret_mounts(correlation_id)
        except VaultTransportError as e:
            raise MountError(
                f"Failed to get secret store information from Vault: {e}",
                context=context,
            ) from e

        mounts: list[ModelMountPoint] = []
        for raw_path, props in listing.items():
            path_prefix = str(raw_path).strip("/")
            if not path_prefix or not isinstance(props, dict):
                continue
            mount_type = props.get("type")
            options = props.get("options")
            kind = EnumEngineKind.classify(
                str(mount_type or ""),
                options if isinstance(options, dict) else None,
            )
            if kind is None:
                logger.debug(
                    "Skipping unsupported secret engine",
                    extra={
                        "mount": path_prefix,
                        "mount_type": mount_type,
                        "correlation_id": str(correlation_id),
                    },
                )
                continue
            mounts.append(ModelMountPoint(path_prefix=path_prefix, engine_kind=kind))

        logger.debug(
            "Discovered secret engines",
            extra={
                "mounts": {m.path_prefix: m.engine_kind.value for m in mounts},
                "correlation_id": str(correlation_id),
            },
        )
        return ModelMountTable(mounts=tuple(mounts))


__all__ = ["MountResolver"]
