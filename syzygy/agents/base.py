"""Base agent definition used by builders and orchestrators."""
from __future__ import annotations

import abc
from typing import Any, Dict, List, Mapping, Optional

from syzygy.agents import capabilities
from syzygy.core.log import safe_error
from syzygy.core.models import AgentConfig, AgentContext
from syzygy.orchestration.nodes import AgentNode


class Agent(abc.ABC):
    """Abstract agent mapping one input to one output.

    Subclasses implement :meth:`handle` and may use the tool and state helpers,
    which all act on the agent's own context and namespace.
    """

    def __init__(self, config: AgentConfig, context: Optional[AgentContext] = None) -> None:
        self.config = config
        self.context = context or AgentContext()

    @property
    def name(self) -> str:
        return self.config.name

    @abc.abstractmethod
    async def handle(self, input: Any) -> Any:
        """Process one input and return one output."""

    async def run(self, input: Any) -> Any:
        """Handle ``input`` and perform the :class:`ToolCall` it may return.

        Orchestrators execute agents through this method. Errors are logged
        and re-raised unchanged.
        """
        try:
            return await capabilities.dispatch(self.context, self.name, await self.handle(input))
        except Exception as exc:
            safe_error(self.context.logger, f"[{self.name}] Error in handler", exc)
            raise

    def as_node(self) -> AgentNode:
        return AgentNode(self)

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.config.name,
            "description": self.config.description,
            "tools": self.context.tool_names,
        }

    async def call_tool(self, tool_name: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await capabilities.call_tool(self.context, self.name, tool_name, params)

    async def save_state(self, key: str, value: Any) -> None:
        await capabilities.save_state(self.context, self.name, key, value)

    async def load_state(self, key: str) -> Optional[Any]:
        return await capabilities.load_state(self.context, self.name, key)

    async def delete_state(self, key: str) -> None:
        await capabilities.delete_state(self.context, self.name, key)

    async def list_state_keys(self) -> List[str]:
        return await capabilities.list_state_keys(self.context, self.name)

    async def clear_state(self) -> None:
        await capabilities.clear_state(self.context, self.name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
