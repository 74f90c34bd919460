"""Orchestrator composing agents and nested orchestrators into pipelines."""
from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Tuple, Union

from syzygy.core.log import ConsoleLogger, safe_error
from syzygy.core.models import Logger
from syzygy.orchestration.nodes import Node, OrchestratorNode

if TYPE_CHECKING:
    from syzygy.agents.base import Agent

ErrorHandler = Callable[[BaseException], None]


class AgentOrchestrator:
    """Run a list of nodes sequentially (pipeline) or in parallel (fan-out).

    The orchestrator keeps no per-call state; every run re-traverses the
    current node list. Cycles between nested orchestrators are not detected.
    """

    def __init__(
        self,
        *,
        name: str = "orchestrator",
        logger: Optional[Logger] = None,
    ) -> None:
        self.name = name
        self._logger = logger or ConsoleLogger(name)
        self._nodes: List[Node] = []
        self._error_handler: Optional[ErrorHandler] = None

    @classmethod
    def create(cls, *, name: str = "orchestrator", logger: Optional[Logger] = None) -> "AgentOrchestrator":
        return cls(name=name, logger=logger)

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return tuple(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def as_node(self) -> OrchestratorNode:
        return OrchestratorNode(self)

    def add(self, node: Union["Agent", "AgentOrchestrator"]) -> "AgentOrchestrator":
        """Append an agent or nested orchestrator; order is execution order."""
        self._nodes.append(node.as_node())
        return self

    def on_error(self, handler: ErrorHandler) -> "AgentOrchestrator":
        """Register the error observer; it never suppresses the error."""
        self._error_handler = handler
        return self

    async def run_sequential(self, input: Any) -> Any:
        """Feed each node's output into the next one and return the last output."""
        result = input
        try:
            for node in list(self._nodes):
                result = await node.run(result, self._logger)
        except Exception as exc:
            self._notify(exc)
            raise
        return result

    async def run_parallel(self, input: Any) -> List[Any]:
        """Send the same input to every node concurrently; results are positional.

        The first failure is raised; nodes still in flight are not cancelled and
        their results are discarded.
        """
        try:
            return list(
                await asyncio.gather(*(node.run(input, self._logger) for node in list(self._nodes)))
            )
        except Exception as exc:
            self._notify(exc)
            raise

    def _notify(self, exc: BaseException) -> None:
        if self._error_handler is not None:
            self._error_handler(exc)
        safe_error(self._logger, f"Orchestration failed in {self.name}", exc)

    def describe(self) -> List[str]:
        return [node.label for node in self._nodes]
