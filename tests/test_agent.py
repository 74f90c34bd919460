"""Tests for agent tool invocation and namespaced state access."""
from __future__ import annotations

from typing import Any, List, Mapping, Tuple

import pytest
from pydantic import BaseModel, ValidationError

from syzygy.agents import capabilities
from syzygy.agents.base import Agent
from syzygy.agents.echo import EchoAgent
from syzygy.core.errors import NoStateManagerError, ToolNotRegisteredError
from syzygy.core.models import AgentConfig, AgentContext, FunctionTool, tool
from syzygy.state.manager import InMemoryStateManager


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


class RecordingLogger:
    def __init__(self) -> None:
        self.entries: List[Tuple[str, Any]] = []

    def log(self, message: str, data: Any = None) -> None:
        self.entries.append((message, data))

    def error(self, message: str, error: BaseException = None) -> None:
        self.entries.append((message, error))


class PassthroughAgent(Agent):
    async def handle(self, input: Any) -> Any:
        return input


async def _echo_params(params: Mapping[str, Any]) -> dict:
    return dict(params)


def make_agent(name: str = "tester", **context: Any) -> Agent:
    return PassthroughAgent(AgentConfig(name=name), AgentContext(**context))


@pytest.mark.anyio
async def test_call_tool_returns_result_and_logs_before_call() -> None:
    logger = RecordingLogger()
    agent = make_agent(tools={"echo": FunctionTool("echo", _echo_params)}, logger=logger)

    result = await agent.call_tool("echo", {"value": 3})

    assert result == {"value": 3}
    assert logger.entries == [('[tester] Calling tool "echo" with params:', {"value": 3})]


@pytest.mark.anyio
async def test_call_tool_missing_names_agent_and_tool() -> None:
    agent = make_agent(name="lonely")

    with pytest.raises(ToolNotRegisteredError) as excinfo:
        await agent.call_tool("ghost", {})

    assert excinfo.value.agent_name == "lonely"
    assert excinfo.value.tool_name == "ghost"
    assert "ghost" in str(excinfo.value) and "lonely" in str(excinfo.value)


@pytest.mark.anyio
async def test_tool_failure_propagates_unchanged() -> None:
    failure = ConnectionError("upstream down")

    async def broken(params: Mapping[str, Any]) -> None:
        raise failure

    agent = make_agent(tools={"broken": FunctionTool("broken", broken)})

    with pytest.raises(ConnectionError) as excinfo:
        await agent.call_tool("broken")

    assert excinfo.value is failure


@pytest.mark.anyio
async def test_tool_params_are_validated_by_model() -> None:
    class Point(BaseModel):
        x: int
        y: int

    @tool("norm", params_model=Point)
    async def norm(point: Point) -> int:
        return abs(point.x) + abs(point.y)

    agent = make_agent(tools={norm.name: norm})

    assert await agent.call_tool("norm", {"x": -2, "y": "3"}) == 5
    with pytest.raises(ValidationError):
        await agent.call_tool("norm", {"x": "left"})


@pytest.mark.anyio
@pytest.mark.parametrize(
    "operation",
    [
        lambda agent: agent.save_state("k", 1),
        lambda agent: agent.load_state("k"),
        lambda agent: agent.delete_state("k"),
        lambda agent: agent.list_state_keys(),
        lambda agent: agent.clear_state(),
    ],
)
async def test_state_operations_require_manager(operation) -> None:
    agent = make_agent(name="stateless")

    with pytest.raises(NoStateManagerError) as excinfo:
        await operation(agent)

    assert excinfo.value.agent_name == "stateless"


@pytest.mark.anyio
async def test_state_round_trip_and_delete() -> None:
    agent = make_agent(state_manager=InMemoryStateManager())
    value = {"items": [1, 2, {"nested": True}], "label": "x"}

    await agent.save_state("k", value)
    assert await agent.load_state("k") == value

    await agent.delete_state("k")
    assert await agent.load_state("k") is None


@pytest.mark.anyio
async def test_agents_sharing_backend_do_not_collide() -> None:
    shared = InMemoryStateManager()
    first = make_agent(name="first", state_manager=shared)
    second = make_agent(name="second", state_manager=shared)

    await first.save_state("x", "v1")
    await second.save_state("x", "v2")

    assert await first.load_state("x") == "v1"
    assert await second.load_state("x") == "v2"
    assert sorted(await shared.keys()) == ["agent:first:x", "agent:second:x"]


@pytest.mark.anyio
async def test_clear_state_only_touches_own_namespace() -> None:
    shared = InMemoryStateManager()
    mine = make_agent(name="mine", state_manager=shared)
    theirs = make_agent(name="theirs", state_manager=shared)
    await mine.save_state("a", 1)
    await mine.save_state("b", 2)
    await theirs.save_state("a", 3)

    assert sorted(await mine.list_state_keys()) == ["a", "b"]
    await mine.clear_state()

    assert await mine.list_state_keys() == []
    assert await theirs.load_state("a") == 3


@pytest.mark.anyio
async def test_missing_logger_is_silent() -> None:
    agent = make_agent(tools={"echo": FunctionTool("echo", _echo_params)}, state_manager=InMemoryStateManager())

    await agent.call_tool("echo", {"a": 1})
    await agent.save_state("k", "v")
    await agent.clear_state()


@pytest.mark.anyio
async def test_capabilities_work_on_bare_context() -> None:
    context = AgentContext(state_manager=InMemoryStateManager())

    await capabilities.save_state(context, "handler", "count", 4)

    assert await capabilities.load_state(context, "handler", "count") == 4
    assert await context.state_manager.get("agent:handler:count") == 4


def test_context_tools_are_read_only_snapshot() -> None:
    tools = {"echo": FunctionTool("echo", _echo_params)}
    context = AgentContext(tools=tools)
    tools["late"] = FunctionTool("late", _echo_params)

    assert list(context.tools) == ["echo"]
    with pytest.raises(TypeError):
        context.tools["other"] = tools["late"]  # type: ignore[index]


@pytest.mark.anyio
async def test_echo_agent_keeps_history_in_state() -> None:
    agent = EchoAgent(AgentConfig(name="echo"), AgentContext(state_manager=InMemoryStateManager()))

    await agent.handle("ping")
    reply = await agent.handle("pong")

    assert reply == "echo heard pong (2 so far)"
    assert await agent.history() == ["ping", "pong"]
    await agent.forget()
    assert await agent.history() == []


class BrokenLogger:
    def log(self, message: str, data: Any = None) -> None:
        raise OSError("log sink unavailable")

    def error(self, message: str, error: BaseException = None) -> None:
        raise OSError("log sink unavailable")


@pytest.mark.anyio
async def test_failing_logger_does_not_break_tools_or_state() -> None:
    agent = make_agent(
        tools={"echo": FunctionTool("echo", _echo_params)},
        logger=BrokenLogger(),
        state_manager=InMemoryStateManager(),
    )

    assert await agent.call_tool("echo", {"a": 1}) == {"a": 1}
    await agent.save_state("k", "v")
    assert await agent.load_state("k") == "v"
    assert await agent.list_state_keys() == ["k"]
    await agent.clear_state()
    assert await agent.list_state_keys() == []


@pytest.mark.anyio
async def test_run_reraises_handler_error_when_logger_fails() -> None:
    class FailingAgent(Agent):
        async def handle(self, input: Any) -> Any:
            raise KeyError(input)

    agent = FailingAgent(AgentConfig(name="failing"), AgentContext(logger=BrokenLogger()))

    with pytest.raises(KeyError):
        await agent.run("missing")
