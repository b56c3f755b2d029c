# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""vault-inject CLI.

Resolves ``--secret`` mappings against Vault and runs a command with the
results in its environment::

    vault-inject --vault-url https://vault.example.com:8200 \\
        -s 'FOO = /secret/foo/bar/secret_password' \\
        -c 'echo $FOO'

Without ``--command`` or ``--each`` the resolved variables are printed as
``NAME=value`` lines suitable for ``eval``.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from uuid import uuid4

import click
from pydantic import SecretStr, ValidationError
from rich.console import Console
from rich.markup import escape

from vault_inject import __version__
from vault_inject.enums import EnumAuthMethod
from vault_inject.errors import ConfigurationError, VaultInjectError
from vault_inject.models import (
    ModelCachePolicy,
    ModelSecretSpec,
    ModelVaultClientConfig,
)
from vault_inject.runtime import ExecutionStage, ResolutionOrchestrator

err_console = Console(stderr=True)

LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"
LOG_LEVEL_ENV: str = "VAULT_INJECT_LOG_LEVEL"


class PromptingCredentialSource:
    """Credentials from options, prompting on stderr for anything missing.

    Prompts happen at most once per value, and only when the authenticator
    asks, so a cached token means no password prompt.
    """

    def __init__(
        self,
        method: EnumAuthMethod,
        username: str | None = None,
        password: str | None = None,
        token: str | None = None,
    ) -> None:
        self._method = method
        self._username = username
        self._secret = token if method is EnumAuthMethod.TOKEN else password

    def get_principal(self) -> str:
        if self._method is EnumAuthMethod.TOKEN:
            return ""
        if not self._username:
            self._username = click.prompt("Please enter Vault username", err=True)
        return self._username

    def get_secret_credential(self) -> SecretStr:
        if not self._secret:
            if self._method is EnumAuthMethod.TOKEN:
                prompt = "Please enter Vault token"
            elif self._method is EnumAuthMethod.LDAP:
                prompt = "Please enter Vault LDAP password"
            else:
                prompt = "Please enter Vault password"
            self._secret = click.prompt(prompt, err=True, hide_input=True)
        return SecretStr(self._secret)


def _parse_auth_type(
    ctx: click.Context, param: click.Parameter, value: str
) -> EnumAuthMethod:
    try:
        return EnumAuthMethod.parse(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def _configure_logging(verbose: int) -> None:
    """WARNING by default, INFO with -v, DEBUG with -vv."""
    if verbose >= 2:
        level: int | str = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
        if not isinstance(logging.getLevelName(level), int):
            level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


def _parse_specs(secrets: tuple[str, ...]) -> list[ModelSecretSpec]:
    return [ModelSecretSpec.parse(secret) for secret in secrets]


def _build_config(
    vault_url: str, namespace: str | None, timeout: float, verify_ssl: bool
) -> ModelVaultClientConfig:
    try:
        return ModelVaultClientConfig(
            url=vault_url,
            namespace=namespace or None,
            timeout_seconds=timeout,
            verify_ssl=verify_ssl,
        )
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise ConfigurationError(f"Invalid Vault settings: {problems}") from e


async def _run(
    config: ModelVaultClientConfig,
    specs: list[ModelSecretSpec],
    method: EnumAuthMethod,
    source: PromptingCredentialSource,
    cache_policy: ModelCachePolicy,
    auth_mount: str | None,
    command: str | None,
    each: str | None,
) -> int:
    orchestrator = ResolutionOrchestrator(config, correlation_id=uuid4())
    env_map = await orchestrator.resolve(
        specs, method, source, cache_policy, auth_mount=auth_mount
    )
    return await ExecutionStage().run(command, each, env_map)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, prog_name="vault-inject")
@click.option(
    "--vault-url",
    envvar="VAULT_ADDR",
    required=True,
    help="Vault server URL (defaults to VAULT_ADDR).",
)
@click.option(
    "--namespace",
    envvar="VAULT_NAMESPACE",
    default=None,
    help="Vault Enterprise namespace.",
)
@click.option(
    "--auth-type",
    "method",
    envvar="VAULT_INJECT_AUTH_TYPE",
    default="userpass",
    show_default=True,
    callback=_parse_auth_type,
    help="Authentication method: userpass, ldap or token.",
)
@click.option(
    "--auth-path",
    envvar="VAULT_INJECT_AUTH_PATH",
    default=None,
    help="Auth mount path (defaults to the method name, e.g. 'ldap').",
)
@click.option("--username", envvar="VAULT_INJECT_USERNAME", default=None)
@click.option(
    "--password",
    envvar="VAULT_INJECT_PASSWORD",
    default=None,
    show_default=False,
    show_envvar=False,
    help="Vault or LDAP password; prompted for when missing.",
)
@click.option(
    "--token",
    envvar="VAULT_INJECT_TOKEN",
    default=None,
    show_default=False,
    show_envvar=False,
    help="Vault token for --auth-type token; prompted for when missing.",
)
@click.option(
    "--secret",
    "-s",
    "secrets",
    multiple=True,
    required=True,
    help="Mapping 'ENV = /path/to/secret/KEY [| command]...'. Repeatable.",
)
@click.option(
    "--command",
    "-c",
    default=None,
    help="Command to run with the secrets in its environment.",
)
@click.option(
    "--each",
    default=None,
    help="Command run once per secret with $name and $value set.",
)
@click.option(
    "--no-cache", is_flag=True, help="Neither read nor write the token cache."
)
@click.option("--no-cache-read", is_flag=True, help="Always log in.")
@click.option("--no-cache-write", is_flag=True, help="Do not store new tokens.")
@click.option(
    "--cache-file",
    envvar="VAULT_INJECT_CACHE_FILE",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Token cache location.",
)
@click.option(
    "--timeout",
    default=30.0,
    show_default=True,
    type=float,
    help="Vault request timeout in seconds.",
)
@click.option("--no-verify-ssl", is_flag=True, help="Skip TLS certificate checks.")
@click.option("--verbose", "-v", count=True, help="-v for info, -vv for debug logs.")
def cli(
    vault_url: str,
    namespace: str | None,
    method: EnumAuthMethod,
    auth_path: str | None,
    username: str | None,
    password: str | None,
    token: str | None,
    secrets: tuple[str, ...],
    command: str | None,
    each: str | None,
    no_cache: bool,
    no_cache_read: bool,
    no_cache_write: bool,
    cache_file: Path | None,
    timeout: float,
    no_verify_ssl: bool,
    verbose: int,
) -> None:
    """Run a command with secrets from Vault in its environment."""
    _configure_logging(verbose)
    try:
        specs = _parse_specs(secrets)
        config = _build_config(vault_url, namespace, timeout, not no_verify_ssl)
        cache_policy = ModelCachePolicy(
            read=not (no_cache or no_cache_read),
            write=not (no_cache or no_cache_write),
            cache_file=cache_file,
        )
        source = PromptingCredentialSource(method, username, password, token)
        status = asyncio.run(
            _run(
                config,
                specs,
                method,
                source,
                cache_policy,
                auth_path,
                command,
                each,
            )
        )
    except VaultInjectError as e:
        err_console.print(
            f"[bold red]Error:[/bold red] {escape(e.describe())}", soft_wrap=True
        )
        raise SystemExit(int(e.exit_code)) from e
    raise SystemExit(status)


def main() -> None:
    """Entry point for the vault-inject CLI."""
    cli()


__all__ = ["PromptingCredentialSource", "cli", "main"]
