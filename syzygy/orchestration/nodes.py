"""Tagged node variants an orchestrator executes."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from syzygy.core.log import safe_log

if TYPE_CHECKING:
    from syzygy.agents.base import Agent
    from syzygy.core.models import Logger
    from syzygy.orchestration.orchestrator import AgentOrchestrator


@dataclass(frozen=True, slots=True)
class AgentNode:
    """Runs a single agent through :meth:`Agent.run`."""

    agent: "Agent"

    @property
    def label(self) -> str:
        return self.agent.name

    async def run(self, input: Any, logger: "Logger") -> Any:
        safe_log(logger, f"Executing agent: {self.agent.name}")
        return await self.agent.run(input)


@dataclass(frozen=True, slots=True)
class OrchestratorNode:
    """Runs a nested orchestrator sequentially, yielding its single result."""

    orchestrator: "AgentOrchestrator"

    @property
    def label(self) -> str:
        return self.orchestrator.name

    async def run(self, input: Any, logger: "Logger") -> Any:
        safe_log(logger, f"Executing orchestrator: {self.orchestrator.name}")
        return await self.orchestrator.run_sequential(input)


Node = Union[AgentNode, OrchestratorNode]
