"""Tool and state helpers that take an :class:`AgentContext` explicitly.

``Agent`` delegates to these, and handlers built with ``AgentBuilder`` can use
them directly with the context they receive.
"""
from __future__ import annotations

from typing import Any, List, Mapping, Optional

from syzygy.core.errors import NoStateManagerError, ToolNotRegisteredError
from syzygy.core.log import safe_log
from syzygy.core.models import AgentContext, ToolCall
from syzygy.state.manager import StateManager


def state_key_prefix(agent_name: str) -> str:
    return f"agent:{agent_name}:"


def state_key(agent_name: str, key: str) -> str:
    return f"{state_key_prefix(agent_name)}{key}"


def _log(context: AgentContext, agent_name: str, message: str, data: Any = None) -> None:
    safe_log(context.logger, f"[{agent_name}] {message}", data)


def _require_state_manager(context: AgentContext, agent_name: str) -> StateManager:
    if context.state_manager is None:
        raise NoStateManagerError(agent_name)
    return context.state_manager


async def call_tool(
    context: AgentContext,
    agent_name: str,
    tool_name: str,
    params: Optional[Mapping[str, Any]] = None,
) -> Any:
    """Invoke a registered tool; its result or exception passes through untouched."""
    tool = context.tools.get(tool_name)
    if tool is None:
        raise ToolNotRegisteredError(agent_name, tool_name)
    params = params or {}
    _log(context, agent_name, f'Calling tool "{tool_name}" with params:', dict(params))
    return await tool.execute(params)


async def dispatch(context: AgentContext, agent_name: str, result: Any) -> Any:
    """Perform ``result`` if it is a :class:`ToolCall`, otherwise return it as is."""
    if isinstance(result, ToolCall):
        return await call_tool(context, agent_name, result.name, result.params)
    return result


async def save_state(context: AgentContext, agent_name: str, key: str, value: Any) -> None:
    manager = _require_state_manager(context, agent_name)
    await manager.set(state_key(agent_name, key), value)
    _log(context, agent_name, f'Saved state for key "{key}"')


async def load_state(context: AgentContext, agent_name: str, key: str) -> Optional[Any]:
    manager = _require_state_manager(context, agent_name)
    value = await manager.get(state_key(agent_name, key))
    _log(context, agent_name, f'Loaded state for key "{key}"')
    return value


async def delete_state(context: AgentContext, agent_name: str, key: str) -> None:
    manager = _require_state_manager(context, agent_name)
    await manager.delete(state_key(agent_name, key))
    _log(context, agent_name, f'Deleted state for key "{key}"')


async def list_state_keys(context: AgentContext, agent_name: str) -> List[str]:
    manager = _require_state_manager(context, agent_name)
    prefix = state_key_prefix(agent_name)
    keys = [key[len(prefix):] for key in await manager.keys() if key.startswith(prefix)]
    _log(context, agent_name, "Listed state keys", keys)
    return keys


async def clear_state(context: AgentContext, agent_name: str) -> None:
    """Delete every key of this agent one by one.

    Not atomic: a write racing with the clear may survive it.
    """
    for key in await list_state_keys(context, agent_name):
        await delete_state(context, agent_name, key)
    _log(context, agent_name, "Cleared all state")
