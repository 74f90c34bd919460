"""Exceptions raised by the toolkit itself.

Failures coming out of tools, handlers or nested orchestrators are never
wrapped in these types; they propagate unchanged.
"""
from __future__ import annotations

from typing import Optional


class SyzygyError(Exception):
    """Base class for toolkit errors."""


class ToolNotRegisteredError(SyzygyError, LookupError):
    """Raised when an agent calls a tool missing from its context."""

    def __init__(self, agent_name: str, tool_name: str) -> None:
        super().__init__(f'Tool "{tool_name}" is not registered in agent "{agent_name}".')
        self.agent_name = agent_name
        self.tool_name = tool_name


class NoStateManagerError(SyzygyError):
    """Raised when a state operation runs without a configured backend."""

    def __init__(self, agent_name: str) -> None:
        super().__init__(f'No state manager available in agent "{agent_name}".')
        self.agent_name = agent_name


class HandlerRequiredError(SyzygyError):
    """Raised by ``AgentBuilder.build`` when no handler was supplied."""

    def __init__(self, agent_name: Optional[str] = None) -> None:
        target = f' "{agent_name}"' if agent_name else ""
        super().__init__(f"Agent{target} handler must be defined.")
        self.agent_name = agent_name
