# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Resolution Orchestrator.

Turns a list of ``--secret`` mappings into an ordered environment map:

    START -> AUTHENTICATED -> MOUNTS_DISCOVERED -> RESOLVING -> FETCHING
          -> AGGREGATED -> DONE

with FAILED reachable from any state.

Ordering:
    Results are ordered by discovery index: mapping order first, then the
    order of keys within each secret document. Fetches and filter pipelines
    run concurrently, so completion order is arbitrary; results are written
    into their discovery slot rather than appended as they finish.

Failure Handling:
    Every task that has been started is allowed to settle before a failure
    is reported. When several tasks fail, the one earliest in discovery
    order is raised.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from typing import TypeVar
from uuid import UUID, uuid4

from pydantic import SecretStr

from vault_inject.enums import EnumAuthMethod, EnumResolutionState
from vault_inject.errors import (
    ModelErrorContext,
    OrchestratorNameCollisionError,
    VaultInjectError,
)
from vault_inject.handlers import VaultHandler
from vault_inject.models import (
    ModelCachePolicy,
    ModelEnvironmentMap,
    ModelFetchRequest,
    ModelResolvedSecret,
    ModelSecretSpec,
    ModelVaultClientConfig,
)
from vault_inject.protocols import ProtocolCredentialSource
from vault_inject.services import (
    Authenticator,
    MountResolver,
    SecretFetcher,
    TokenCache,
    ValuePipeline,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ResolutionOrchestrator:
    """Drives one invocation from login to the finished environment map.

    Args:
        config: Vault connection settings
        handler: Vault handler; one is created from ``config`` if omitted
        token_cache: Token cache; one is created from the cache policy if
            omitted and the policy reads or writes the cache
        pipeline: Filter executor
        correlation_id: Correlation ID for this invocation
    """

    def __init__(
        self,
        config: ModelVaultClientConfig,
        handler: VaultHandler | None = None,
        token_cache: TokenCache | None = None,
        pipeline: ValuePipeline | None = None,
        correlation_id: UUID | None = None,
    ) -> None:
        self._config = config
        self._handler = handler or VaultHandler(config)
        self._token_cache = token_cache
        self._pipeline = pipeline or ValuePipeline()
        self._correlation_id = correlation_id or uuid4()
        self._state = EnumResolutionState.START

    @property
    def state(self) -> EnumResolutionState:
        return self._state

    @property
    def correlation_id(self) -> UUID:
        return self._correlation_id

    def _transition(self, state: EnumResolutionState) -> None:
        logger.debug(
            "Resolution state %s -> %s",
            self._state.value,
            state.value,
            extra={"correlation_id": str(self._correlation_id)},
        )
        self._state = state

    async def resolve(
        self,
        specs: Sequence[ModelSecretSpec],
        method: EnumAuthMethod,
        source: ProtocolCredentialSource,
        cache_policy: ModelCachePolicy,
        auth_mount: str | None = None,
    ) -> ModelEnvironmentMap:
        """Authenticate, discover mounts, then resolve every mapping.

        Args:
            specs: Parsed ``--secret`` mappings, in command line order
            method: Auth method
            source: Credential source for the auth method
            cache_policy: Token cache read/write gating
            auth_mount: Auth mount path override

        Returns:
            The environment map in discovery order.

        Raises:
            VaultInjectError: The first failure in discovery order. The
                handler is shut down either way.
        """
        self._handler.initialize()
        try:
            authenticator = Authenticator(
                self._handler, self._token_cache_for(cache_policy)
            )
            session = await authenticator.authenticate(
                method,
                source,
                cache_policy,
                auth_mount=auth_mount,
                correlation_id=self._correlation_id,
            )
            self._handler.set_token(session.token)
            self._transition(EnumResolutionState.AUTHENTICATED)

            mounts = await MountResolver(self._handler).discover(self._correlation_id)
            self._transition(EnumResolutionState.MOUNTS_DISCOVERED)

            fetcher = SecretFetcher(self._handler, mounts, self._correlation_id)
            self._transition(EnumResolutionState.RESOLVING)
            requests = await self._expand(specs, fetcher)

            self._transition(EnumResolutionState.FETCHING)
            secrets = await self._fetch_all(requests, fetcher)

            env_map = self._aggregate(secrets)
            self._transition(EnumResolutionState.AGGREGATED)

            logger.info(
                "Resolved secrets",
                extra={
                    "names": env_map.names,
                    "correlation_id": str(self._correlation_id),
                },
            )
            self._transition(EnumResolutionState.DONE)
            return env_map
        except Exception:
            self._transition(EnumResolutionState.FAILED)
            raise
        finally:
            await self._handler.shutdown()

    def _token_cache_for(self, cache_policy: ModelCachePolicy) -> TokenCache | None:
        if self._token_cache is None and (cache_policy.read or cache_policy.write):
            self._token_cache = TokenCache(cache_policy.cache_file)
        return self._token_cache

    async def _expand(
        self,
        specs: Sequence[ModelSecretSpec],
        fetcher: SecretFetcher,
    ) -> list[ModelFetchRequest]:
        """Match every mapping against its document's keys.

        Literal keys are taken as-is; whether they exist is found out when
        they are fetched.
        """

        async def candidates(spec: ModelSecretSpec) -> list[str]:
            if spec.key_template.has_placeholders:
                return await fetcher.list_keys(spec.document_path)
            return [spec.key_template.literal()]

        key_lists = await _settle(
            [candidates(spec) for spec in specs],
            specs,
        )

        requests: list[ModelFetchRequest] = []
        for spec, keys in zip(specs, key_lists):
            matched = 0
            for key in keys:
                bindings = spec.key_template.match(key)
                if bindings is None:
                    continue
                try:
                    env_name = spec.env_template.substitute(bindings)
                except VaultInjectError as e:
                    _attach_spec(e, spec)
                    raise
                requests.append(
                    ModelFetchRequest(
                        spec=spec,
                        key=key,
                        env_name=env_name,
                        discovery_index=len(requests),
                    )
                )
                matched += 1

            if matched == 0:
                logger.warning(
                    "No secrets matched '%s'",
                    spec.path_template,
                    extra={
                        "secret_spec": spec.raw,
                        "candidate_count": len(keys),
                        "correlation_id": str(self._correlation_id),
                    },
                )

        logger.debug(
            "Matched secret keys",
            extra={
                "request_count": len(requests),
                "correlation_id": str(self._correlation_id),
            },
        )
        return requests

    async def _fetch_all(
        self,
        requests: Sequence[ModelFetchRequest],
        fetcher: SecretFetcher,
    ) -> list[ModelResolvedSecret]:
        """Fetch and filter every request concurrently."""
        semaphore = asyncio.Semaphore(self._config.max_concurrent_operations)

        async def resolve_one(request: ModelFetchRequest) -> ModelResolvedSecret:
            async with semaphore:
                raw_value = await fetcher.fetch(
                    request.spec.document_path, request.key
                )
                final = await self._pipeline.apply(
                    request.spec.filters,
                    raw_value.encode("utf-8"),
                    context=ModelErrorContext(
                        operation="filter",
                        secret_spec=request.spec.raw,
                        secret_path=request.origin_path,
                        correlation_id=self._correlation_id,
                    ),
                )
            return ModelResolvedSecret(
                env_name=request.env_name,
                raw_value=SecretStr(raw_value),
                final_value=SecretStr(final.decode("utf-8", errors="surrogateescape")),
                origin_path=request.origin_path,
                discovery_index=request.discovery_index,
            )

        return await _settle(
            [resolve_one(request) for request in requests],
            [request.spec for request in requests],
        )

    def _aggregate(
        self, secrets: Sequence[ModelResolvedSecret]
    ) -> ModelEnvironmentMap:
        """Check names are unique and build the map in discovery order."""
        seen: dict[str, ModelResolvedSecret] = {}
        for secret in sorted(secrets, key=lambda s: s.discovery_index):
            earlier = seen.get(secret.env_name)
            if earlier is not None:
                raise OrchestratorNameCollisionError(
                    f"The environment variable '{secret.env_name}' would be set "
                    f"by both '/{earlier.origin_path}' and '/{secret.origin_path}'",
                    env_name=secret.env_name,
                    first_path=earlier.origin_path,
                    second_path=secret.origin_path,
                )
            seen[secret.env_name] = secret
        return ModelEnvironmentMap(secrets=tuple(seen.values()))


async def _settle(
    awaitables: Sequence[Awaitable[T]],
    specs: Sequence[ModelSecretSpec],
) -> list[T]:
    """Await everything, then raise the earliest failure if there was one."""
    results = await asyncio.gather(*awaitables, return_exceptions=True)
    for spec, result in zip(specs, results):
        if isinstance(result, BaseException):
            if isinstance(result, VaultInjectError):
                _attach_spec(result, spec)
            raise result
    return list(results)


def _attach_spec(error: VaultInjectError, spec: ModelSecretSpec) -> None:
    if error.context is None or error.context.secret_spec is None:
        error.extra_context.setdefault("secret_spec", spec.raw)


__all__ = ["ResolutionOrchestrator"]
