# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Execution Stage.

Hands the resolved environment to the user's commands:

    - ``--each COMMAND`` runs once per secret, with ``$name``, ``$value`` and
      ``$secret`` set for that secret
    - ``--command COMMAND`` runs once with every secret in its environment;
      its exit status becomes the tool's exit status
    - with neither, the secrets are printed as shell-quoted ``NAME=value``
      lines

Commands run with ``sh -c`` and inherit the standard streams.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shlex
import sys
from typing import TextIO

from vault_inject.errors import ExecError, ModelErrorContext
from vault_inject.models import ModelEnvironmentMap

logger = logging.getLogger(__name__)

# Shells report a child killed by signal N as 128 + N.
SIGNAL_EXIT_BASE: int = 128


def exit_status(returncode: int) -> int:
    """Map a subprocess return code to a shell-style exit status."""
    if returncode < 0:
        return SIGNAL_EXIT_BASE - returncode
    return returncode


class ExecutionStage:
    """Runs ``--each`` and ``--command`` against a resolved environment."""

    def __init__(self, base_env: dict[str, str] | None = None) -> None:
        self._base_env = dict(os.environ) if base_env is None else dict(base_env)

    def _environment(
        self, env_map: ModelEnvironmentMap, **overrides: str
    ) -> dict[str, str]:
        env = dict(self._base_env)
        env.update(env_map.as_env())
        env.update(overrides)
        return env

    async def run_each(self, command: str, env_map: ModelEnvironmentMap) -> None:
        """Run ``command`` once per secret, in discovery order.

        A run that fails, or cannot be started, is logged and does not stop
        the remaining runs.
        """
        for secret in env_map.secrets:
            value = secret.final_value.get_secret_value()
            env = self._environment(
                env_map, name=secret.env_name, value=value, secret=value
            )
            try:
                returncode = await self._spawn(command, env)
            except ExecError as e:
                logger.warning(
                    "Command for '%s' could not be started: %s",
                    secret.env_name,
                    e,
                    extra={"command": command, "env_name": secret.env_name},
                )
                continue
            if returncode != 0:
                logger.warning(
                    "Command for '%s' exited with status %d",
                    secret.env_name,
                    exit_status(returncode),
                    extra={"command": command, "env_name": secret.env_name},
                )

    async def run_main(self, command: str, env_map: ModelEnvironmentMap) -> int:
        """Run the main command and return its exit status."""
        returncode = await self._spawn(command, self._environment(env_map))
        status = exit_status(returncode)
        logger.debug(
            "Command finished",
            extra={"command": command, "exit_status": status},
        )
        return status

    def print_environment(
        self, env_map: ModelEnvironmentMap, stream: TextIO | None = None
    ) -> None:
        """Write ``NAME=value`` lines, quoted for a POSIX shell."""
        stream = stream or sys.stdout
        for name, value in env_map.as_env().items():
            stream.write(f"{name}={shlex.quote(value)}\n")
        stream.flush()

    async def run(
        self,
        command: str | None,
        each: str | None,
        env_map: ModelEnvironmentMap,
        stream: TextIO | None = None,
    ) -> int:
        """Run whatever was asked for and return the tool's exit status."""
        if each:
            await self.run_each(each, env_map)
        if command:
            return await self.run_main(command, env_map)
        if not each:
            self.print_environment(env_map, stream)
        return 0

    async def _spawn(self, command: str, env: dict[str, str]) -> int:
        try:
            process = await asyncio.create_subprocess_shell(command, env=env)
        except OSError as e:
            raise ExecError(
                f"Failed to run the command '{command}': {e.strerror or e}",
                context=ModelErrorContext(operation="exec"),
                command=command,
            ) from e
        return await process.wait()


__all__ = ["ExecutionStage", "exit_status"]
