# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""vault-inject Runtime Module.

Exports:
    ResolutionOrchestrator: Login, mount discovery, matching, fetching and
        aggregation for one invocation
    ExecutionStage: Runs ``--each`` / ``--command`` or prints the environment
"""

from vault_inject.runtime.execution_stage import ExecutionStage, exit_status
from vault_inject.runtime.resolution_orchestrator import ResolutionOrchestrator

__all__: list[str] = [
    "ExecutionStage",
    "ResolutionOrchestrator",
    "exit_status",
]
