"""Fetcher and transformer agents forming the data workflow example."""
from __future__ import annotations

import json
from typing import Any, Mapping, Optional

from syzygy.agents.base import Agent
from syzygy.agents.builder import AgentBuilder
from syzygy.core.models import AgentConfig, AgentContext, Logger, ToolCall
from syzygy.services.tools import fetch_data, transform
from syzygy.state.manager import StateManager

FETCHER = AgentConfig(name="FetcherAgent", description="Fetches data from various sources")
TRANSFORMER = AgentConfig(
    name="TransformerAgent", description="Transforms data into different formats"
)


async def handle_fetch(input: Any, context: AgentContext) -> ToolCall:
    return ToolCall("fetchData", {"source": str(input)})


def transform_request(input: Any, default_format: str) -> ToolCall:
    """Accept ``"fmt:<json>"`` strings, ``{"format", "data"}`` mappings or raw rows."""
    if isinstance(input, str):
        fmt, _, payload = input.partition(":")
        return ToolCall("transform", {"format": fmt, "data": json.loads(payload or "[]")})
    if isinstance(input, Mapping):
        return ToolCall(
            "transform",
            {"format": input.get("format", default_format), "data": input.get("data", [])},
        )
    return ToolCall("transform", {"format": default_format, "data": list(input or [])})


def _configure(builder: AgentBuilder, logger: Optional[Logger], state_manager: Optional[StateManager]) -> Agent:
    if logger is not None:
        builder.with_logger(logger)
    if state_manager is not None:
        builder.with_state_manager(state_manager)
    return builder.build()


def build_fetcher_agent(
    *,
    logger: Optional[Logger] = None,
    state_manager: Optional[StateManager] = None,
) -> Agent:
    return _configure(
        AgentBuilder(FETCHER).with_tool(fetch_data).with_handler(handle_fetch),
        logger,
        state_manager,
    )


def build_transformer_agent(
    default_format: str = "json",
    *,
    logger: Optional[Logger] = None,
    state_manager: Optional[StateManager] = None,
) -> Agent:
    async def handle_transform(input: Any, context: AgentContext) -> ToolCall:
        return transform_request(input, default_format)

    return _configure(
        AgentBuilder(TRANSFORMER).with_tool(transform).with_handler(handle_transform),
        logger,
        state_manager,
    )
