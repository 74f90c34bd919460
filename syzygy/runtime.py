"""Application runtime composition helpers."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Optional

from syzygy.agents.assistant import build_chat_agent, build_ui_agent
from syzygy.agents.base import Agent
from syzygy.agents.calculator import build_calculator_agent
from syzygy.agents.data import build_fetcher_agent, build_transformer_agent
from syzygy.agents.echo import EchoAgent
from syzygy.config import Config, config
from syzygy.core.log import ConsoleLogger
from syzygy.core.models import AgentConfig, AgentContext
from syzygy.orchestration.orchestrator import AgentOrchestrator
from syzygy.state.manager import InMemoryStateManager, StateManager, StorageStateManager
from syzygy.state.storage import SQLiteStorage

SEQUENTIAL = "sequential"
PARALLEL = "parallel"


@dataclass(frozen=True)
class Pipeline:
    """Named orchestrator exposed by the demo and the HTTP harness."""

    name: str
    orchestrator: AgentOrchestrator
    mode: str = SEQUENTIAL
    description: Optional[str] = None


def build_state_manager(cfg: Config) -> StateManager:
    if cfg.state.backend == "sqlite":
        return StorageStateManager(SQLiteStorage(cfg.state.path), prefix=cfg.state.prefix)
    return InMemoryStateManager()


@lru_cache
def get_state_manager() -> StateManager:
    return build_state_manager(config)


@lru_cache
def get_agents() -> Dict[str, Agent]:
    state_manager = get_state_manager()
    echo = EchoAgent(
        AgentConfig(name="EchoAgent", description="Echoes input and remembers it"),
        AgentContext(logger=ConsoleLogger("EchoAgent"), state_manager=state_manager),
    )
    agents = [
        build_calculator_agent(state_manager=state_manager),
        build_fetcher_agent(state_manager=state_manager),
        build_transformer_agent("csv", state_manager=state_manager),
        build_chat_agent(state_manager=state_manager),
        build_ui_agent(),
        echo,
    ]
    return {agent.name: agent for agent in agents}


def build_pipelines(agents: Dict[str, Agent]) -> Dict[str, Pipeline]:
    ui_agent = agents["UIAgent"]
    pipelines = [
        Pipeline(
            name="calculator",
            orchestrator=AgentOrchestrator.create(name="calculator").add(agents["CalculatorAgent"]),
            description="Evaluate '<operation> <a> <b>'",
        ),
        Pipeline(
            name="data-workflow",
            orchestrator=AgentOrchestrator.create(name="data-workflow")
            .add(agents["FetcherAgent"])
            .add(agents["TransformerAgent"]),
            description="Fetch a source and render it as csv",
        ),
        Pipeline(
            name="ui-showcase",
            orchestrator=AgentOrchestrator.create(name="ui-showcase")
            .add(ui_agent)
            .add(AgentOrchestrator.create(name="ui-nested").add(ui_agent).add(ui_agent)),
            description="UI agent followed by a nested orchestrator",
        ),
        Pipeline(
            name="assistants",
            orchestrator=AgentOrchestrator.create(name="assistants")
            .add(agents["OpenAIAgent"])
            .add(agents["EchoAgent"]),
            mode=PARALLEL,
            description="Ask the chat agent and the echo agent at once",
        ),
    ]
    return {pipeline.name: pipeline for pipeline in pipelines}


@lru_cache
def get_pipelines() -> Dict[str, Pipeline]:
    return build_pipelines(get_agents())


def get_pipeline(name: str) -> Pipeline:
    pipelines = get_pipelines()
    if name not in pipelines:
        raise KeyError(f"No pipeline registered with name '{name}'")
    return pipelines[name]


async def close_state_manager(manager: StateManager) -> None:
    """Release the durable backend's connection if one was opened."""
    storage = getattr(manager, "storage", None)
    if isinstance(storage, SQLiteStorage):
        await storage.close()
