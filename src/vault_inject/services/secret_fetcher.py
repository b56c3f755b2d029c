# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Secret Fetcher.

Reads secret documents from whichever engine owns their path and hands out
keys and values from them.

Documents are addressed as ``<mount>/<document path>``, e.g.
``secret/foo/bar``; a value is addressed by its document plus the key, e.g.
``("secret/foo/bar", "secret_password")``. Each document is read at most once
per fetcher; concurrent callers asking for the same document share one
request.
"""

from __future__ import annotations

import asyncio
import json
import logging
from uuid import UUID, uuid4

from vault_inject.enums import EnumEngineKind
from vault_inject.errors import (
    FetchNotFoundError,
    FetchPermissionDeniedError,
    FetchServiceError,
    FetchUnknownMountError,
    ModelErrorContext,
    VaultForbiddenError,
    VaultInvalidPathError,
    VaultTransportError,
)
from vault_inject.handlers import VaultHandler
from vault_inject.models import ModelMountTable

logger = logging.getLogger(__name__)


def render_value(value: object) -> str:
    """Strings pass through; anything else becomes compact JSON text."""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"))


class SecretFetcher:
    """Reads KV2 and Cubbyhole documents for one invocation."""

    def __init__(
        self,
        handler: VaultHandler,
        mounts: ModelMountTable,
        correlation_id: UUID | None = None,
    ) -> None:
        self._handler = handler
        self._mounts = mounts
        self._correlation_id = correlation_id or uuid4()
        self._documents: dict[str, asyncio.Future[dict[str, str]]] = {}

    async def list_keys(self, document_path: str) -> list[str]:
        """Keys of the document at ``document_path``, in document order."""
        document = await self.read_document(document_path)
        return list(document)

    async def fetch(self, document_path: str, key: str) -> str:
        """Value of ``key`` in the document at ``document_path``.

        Keys may contain ``/``; they are never split off a joined path.

        Raises:
            FetchNotFoundError: If the document or the key does not exist.
        """
        document_path = document_path.strip("/")
        document = await self.read_document(document_path)
        if key not in document:
            raise FetchNotFoundError(
                f"Could not find the secret '{key}' at path '/{document_path}'",
                context=self._context("fetch", f"{document_path}/{key}"),
            )
        return document[key]

    async def read_document(self, document_path: str) -> dict[str, str]:
        """Read (once) and return the key/value pairs of a document."""
        document_path = document_path.strip("/")
        pending = self._documents.get(document_path)
        if pending is None:
            pending = asyncio.ensure_future(self._read(document_path))
            self._documents[document_path] = pending
        return await asyncio.shield(pending)

    async def _read(self, document_path: str) -> dict[str, str]:
        resolved = self._mounts.resolve(document_path)
        if resolved is None:
            raise FetchUnknownMountError(
                f"The path '/{document_path}' is not supported "
                "(no known secret storage is mounted here)",
                context=self._context("read_secret", document_path),
            )
        mount, relative_path = resolved
        if not relative_path:
            raise FetchNotFoundError(
                f"The path '/{document_path}' names a mount, not a secret",
                context=self._context("read_secret", document_path),
            )

        try:
            if mount.engine_kind is EnumEngineKind.KV2:
                data = await self._handler.read_kv2(
                    mount.path_prefix, relative_path, self._correlation_id
                )
            else:
                data = await self._handler.read_cubbyhole(
                    mount.path_prefix, relative_path, self._correlation_id
                )
        except VaultInvalidPathError as e:
            raise FetchNotFoundError(
                f"Could not find any secrets at path '/{relative_path}' from "
                f"{_engine_label(mount.engine_kind)} store mounted at "
                f"'/{mount.path_prefix}'",
                context=self._context("read_secret", document_path),
            ) from e
        except VaultForbiddenError as e:
            raise FetchPermissionDeniedError(
                f"Permission denied reading '/{document_path}'",
                context=self._context("read_secret", document_path),
            ) from e
        except VaultTransportError as e:
            raise FetchServiceError(
                f"Failed to read '/{document_path}' from Vault: {e}",
                context=self._context("read_secret", document_path),
            ) from e

        logger.debug(
            "Read secret document",
            extra={
                "path": document_path,
                "engine": mount.engine_kind.value,
                "key_count": len(data),
                "correlation_id": str(self._correlation_id),
            },
        )
        return {str(key): render_value(value) for key, value in data.items()}

    def _context(self, operation: str, path: str) -> ModelErrorContext:
        return ModelErrorContext(
            operation=operation,
            secret_path=path,
            correlation_id=self._correlation_id,
        )


def _engine_label(kind: EnumEngineKind) -> str:
    return "KV2" if kind is EnumEngineKind.KV2 else "Cubbyhole"


__all__ = ["SecretFetcher", "render_value"]
