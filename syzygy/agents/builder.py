"""Fluent assembly of agents from tools and a handler function."""
from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Optional, Union

from syzygy.agents.base import Agent
from syzygy.core.errors import HandlerRequiredError
from syzygy.core.log import ConsoleLogger
from syzygy.core.models import AgentConfig, AgentContext, Logger, Tool
from syzygy.state.manager import InMemoryStateManager, StateManager

Handler = Callable[[Any, AgentContext], Awaitable[Any]]


class HandlerAgent(Agent):
    """Agent whose ``handle`` delegates to a handler function.

    A handler may return a :class:`ToolCall` instead of a value; :meth:`Agent.run`
    performs it and returns the tool's result.
    """

    def __init__(self, config: AgentConfig, context: AgentContext, handler: Handler) -> None:
        super().__init__(config, context)
        self._handler = handler

    async def handle(self, input: Any) -> Any:
        return await self._handler(input, self.context)


class AgentBuilder:
    """Collect tools, a handler and optional collaborators, then :meth:`build`."""

    def __init__(self, config: Union[AgentConfig, str], description: Optional[str] = None) -> None:
        if isinstance(config, str):
            config = AgentConfig(name=config, description=description)
        self._config = config
        self._handler: Optional[Handler] = None
        self._tools: Dict[str, Tool] = {}
        self._state_manager: Optional[StateManager] = None
        self._logger: Optional[Logger] = None

    def with_tool(self, tool: Tool) -> "AgentBuilder":
        """Register a tool; a later tool with the same name replaces it."""
        self._tools[tool.name] = tool
        return self

    def with_tools(self, *tools: Tool) -> "AgentBuilder":
        for tool in tools:
            self.with_tool(tool)
        return self

    def with_handler(self, handler: Handler) -> "AgentBuilder":
        self._handler = handler
        return self

    def with_state_manager(self, manager: StateManager) -> "AgentBuilder":
        self._state_manager = manager
        return self

    def with_logger(self, logger: Logger) -> "AgentBuilder":
        self._logger = logger
        return self

    def build(self) -> Agent:
        if self._handler is None:
            raise HandlerRequiredError(self._config.name)
        context = AgentContext(
            tools=dict(self._tools),
            logger=self._logger or ConsoleLogger(self._config.name),
            state_manager=self._state_manager or InMemoryStateManager(),
        )
        return HandlerAgent(self._config, context, self._handler)
