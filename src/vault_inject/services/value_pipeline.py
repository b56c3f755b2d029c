# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Value Pipeline Executor.

Runs a secret value through the ``| command`` filters of its mapping, e.g.
``BAR = /cubbyhole/wibble/cubby1 | base64 | rev``. Each stage is run with
``sh -c``; the value is written to the first stage's stdin and each stage's
stdout feeds the next. Stages of one pipeline run one after another;
pipelines for different secrets can run concurrently.

Exactly one trailing newline is trimmed from the last stage's output, since
most command line tools append one. Intermediate outputs are passed on
untouched.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from vault_inject.errors import ModelErrorContext, PipelineStageFailedError

logger = logging.getLogger(__name__)

MAX_STDERR_CHARS: int = 2000


def trim_trailing_newline(data: bytes) -> bytes:
    """Remove exactly one trailing ``\\n`` if present."""
    return data[:-1] if data.endswith(b"\n") else data


class ValuePipeline:
    """Applies filter commands to secret values."""

    async def apply(
        self,
        filters: Sequence[str],
        data: bytes,
        context: ModelErrorContext | None = None,
    ) -> bytes:
        """Pipe ``data`` through ``filters`` in order.

        Args:
            filters: Command lines, run with ``sh -c``
            data: Raw secret value
            context: Error context describing which secret is being filtered

        Returns:
            Output of the last stage with one trailing newline trimmed, or
            ``data`` unchanged when there are no filters.

        Raises:
            PipelineStageFailedError: If a stage cannot be started or exits
                non-zero. No partial result is returned.
        """
        if not filters:
            return data

        for index, command in enumerate(filters):
            stage_context = _stage_context(context, index)
            try:
                process = await asyncio.create_subprocess_shell(
                    command,
                    stdin=asyncio.subprocess.PIPE,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                )
            except OSError as e:
                raise PipelineStageFailedError(
                    f"Failed to run the command '{command}': {e.strerror or e}",
                    stage_index=index,
                    status=None,
                    context=stage_context,
                    command=command,
                ) from e

            stdout, stderr = await process.communicate(data)
            status = process.returncode
            if status != 0:
                message = f"The command '{command}' failed with exit status {status}"
                error_output = stderr.decode("utf-8", errors="replace").strip()
                if error_output:
                    message += f":\n\n{error_output[:MAX_STDERR_CHARS]}"
                raise PipelineStageFailedError(
                    message,
                    stage_index=index,
                    status=status,
                    context=stage_context,
                    command=command,
                )

            logger.debug(
                "Filter stage completed",
                extra={
                    "stage_index": index,
                    "command": command,
                    "output_bytes": len(stdout),
                },
            )
            data = stdout

        return trim_trailing_newline(data)


def _stage_context(
    context: ModelErrorContext | None, index: int
) -> ModelErrorContext:
    if context is None:
        return ModelErrorContext(operation="filter", stage_index=index)
    return context.model_copy(update={"operation": "filter", "stage_index": index})


__all__ = ["MAX_STDERR_CHARS", "ValuePipeline", "trim_trailing_newline"]
