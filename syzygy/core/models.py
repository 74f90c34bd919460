"""Core data models shared across agent, builder and orchestrator components."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Protocol,
    Type,
    runtime_checkable,
)

from pydantic import BaseModel

if TYPE_CHECKING:
    from syzygy.state.manager import StateManager


@runtime_checkable
class Logger(Protocol):
    """Logging boundary consumed by agents and orchestrators."""

    def log(self, message: str, data: Any = None) -> None:
        ...

    def error(self, message: str, error: Optional[BaseException] = None) -> None:
        ...


@runtime_checkable
class Tool(Protocol):
    """A named async capability an agent can invoke."""

    name: str

    async def execute(self, params: Mapping[str, Any]) -> Any:
        ...


@dataclass(frozen=True, slots=True)
class FunctionTool:
    """Tool backed by an async function, with optional pydantic params checking.

    When ``params_model`` is set the raw params are validated through it and
    the function receives the model instance instead of the mapping.
    """

    name: str
    fn: Callable[[Any], Awaitable[Any]]
    params_model: Optional[Type[BaseModel]] = None
    description: Optional[str] = None

    async def execute(self, params: Mapping[str, Any]) -> Any:
        if self.params_model is not None:
            return await self.fn(self.params_model.model_validate(dict(params)))
        return await self.fn(params)


def tool(
    name: Optional[str] = None,
    *,
    params_model: Optional[Type[BaseModel]] = None,
    description: Optional[str] = None,
) -> Callable[[Callable[[Any], Awaitable[Any]]], FunctionTool]:
    """Decorator turning an async function into a :class:`FunctionTool`."""

    def decorator(fn: Callable[[Any], Awaitable[Any]]) -> FunctionTool:
        return FunctionTool(
            name=name or fn.__name__,
            fn=fn,
            params_model=params_model,
            description=description or (fn.__doc__ or "").strip() or None,
        )

    return decorator


@dataclass(frozen=True, slots=True)
class ToolCall:
    """Explicit request, returned by a handler, to invoke a registered tool."""

    name: str
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class AgentConfig:
    """Identity of an agent; ``name`` doubles as state namespace and log prefix."""

    name: str
    description: Optional[str] = None


@dataclass(frozen=True, slots=True)
class AgentContext:
    """Tools, logger and state backend an agent is constructed with."""

    tools: Mapping[str, Tool] = field(default_factory=dict)
    logger: Optional[Logger] = None
    state_manager: Optional["StateManager"] = None

    def __post_init__(self) -> None:
        # Private copy so later mutation of the caller's dict is not observed.
        object.__setattr__(self, "tools", MappingProxyType(dict(self.tools)))

    @property
    def tool_names(self) -> List[str]:
        return sorted(self.tools)
