# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""On-disk Vault Token Cache.

Remembers the token from the last successful login per
``(service URL, auth method, principal)`` so repeated invocations do not
prompt for a password every time.

Lifecycle:
    - ``load()`` once at session start (skipped when cache reads are disabled)
    - ``get()`` returns an entry only if it has not expired; expired entries
      are treated as absent, not deleted
    - ``put()`` + ``save()`` at most once, after a fresh login

Failure Handling:
    The cache never fails an invocation. An unreadable or corrupt file is a
    cache miss and a failed write is logged and ignored.

Atomic Writes:
    The file is written to a temp file in the same directory and renamed over
    the old one, so a concurrently running invocation never reads a
    half-written cache.
"""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from vault_inject.enums import EnumAuthMethod
from vault_inject.models import (
    CACHE_FILE_VERSION,
    ModelCacheEntry,
    ModelTokenCacheFile,
)

logger = logging.getLogger(__name__)

CACHE_DIR_NAME: str = "vault_inject"
CACHE_FILE_NAME: str = "cache.json"


def default_cache_file() -> Path:
    """``$XDG_CACHE_HOME/vault_inject/cache.json`` (``~/.cache`` by default)."""
    base = os.environ.get("XDG_CACHE_HOME") or str(Path.home() / ".cache")
    return Path(base) / CACHE_DIR_NAME / CACHE_FILE_NAME


class TokenCache:
    """Token cache backed by a single JSON file."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or default_cache_file()
        self._entries: dict[tuple[str, EnumAuthMethod, str], ModelCacheEntry] = {}
        self._loaded = False
        self._dirty = False

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> None:
        """Read the cache file, treating any problem as an empty cache."""
        self._loaded = True
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            logger.debug("No token cache file", extra={"path": str(self._path)})
            return
        except OSError as e:
            logger.warning(
                "Token cache unreadable, ignoring it",
                extra={"path": str(self._path), "error_type": type(e).__name__},
            )
            return

        try:
            cache_file = ModelTokenCacheFile.model_validate_json(raw)
        except ValidationError:
            logger.warning(
                "Token cache corrupt, ignoring it",
                extra={"path": str(self._path)},
            )
            return

        if cache_file.version != CACHE_FILE_VERSION:
            logger.warning(
                "Token cache has unknown version, ignoring it",
                extra={"path": str(self._path), "version": cache_file.version},
            )
            return

        self._entries = {entry.key: entry for entry in cache_file.entries}

    def get(
        self,
        service_url: str,
        auth_method: EnumAuthMethod,
        principal: str,
        now: datetime | None = None,
    ) -> ModelCacheEntry | None:
        """Return the unexpired entry for the key, if there is one."""
        if not self._loaded:
            self.load()
        entry = self._entries.get((service_url, auth_method, principal))
        if entry is None:
            return None
        if entry.is_expired(now):
            logger.debug(
                "Cached token expired",
                extra={
                    "auth_method": auth_method.value,
                    "principal": principal,
                    "expires_at": str(entry.expires_at),
                },
            )
            return None
        return entry

    def put(self, entry: ModelCacheEntry) -> None:
        """Record an entry in memory; ``save()`` persists it.

        The file is loaded first if nothing has read it yet, so entries for
        other principals survive the next save.
        """
        if not self._loaded:
            self.load()
        self._entries[entry.key] = entry
        self._dirty = True

    def save(self) -> bool:
        """Atomically write the cache file. Returns False if the write failed."""
        if not self._dirty:
            return True

        cache_file = ModelTokenCacheFile(entries=list(self._entries.values()))
        payload = cache_file.model_dump_json(indent=2).encode("utf-8")

        temp_path: Path | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
            temp_fd, temp_name = tempfile.mkstemp(
                suffix=".tmp",
                prefix=f".{self._path.name}_",
                dir=self._path.parent,
            )
            temp_path = Path(temp_name)
            with os.fdopen(temp_fd, "wb") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(temp_path, 0o600)
            temp_path.replace(self._path)
        except OSError as e:
            logger.warning(
                "Failed to update token cache",
                extra={"path": str(self._path), "error_type": type(e).__name__},
            )
            if temp_path is not None and temp_path.exists():
                temp_path.unlink(missing_ok=True)
            return False

        self._dirty = False
        logger.debug("Token cache saved", extra={"path": str(self._path)})
        return True


__all__ = ["CACHE_DIR_NAME", "CACHE_FILE_NAME", "TokenCache", "default_cache_file"]
