"""Calculator agent parsing ``"<operation> <a> <b>"`` requests."""
from __future__ import annotations

from typing import Any, Optional

from syzygy.agents import capabilities
from syzygy.agents.base import Agent
from syzygy.agents.builder import AgentBuilder
from syzygy.core.models import AgentConfig, AgentContext, Logger
from syzygy.services.tools import calculate
from syzygy.state.manager import StateManager

CONFIG = AgentConfig(name="CalculatorAgent", description="Performs basic math operations")


async def handle_calculation(input: Any, context: AgentContext) -> str:
    operation, *operands = str(input).split()
    if len(operands) != 2:
        raise ValueError(f"Expected '<operation> <a> <b>', got {input!r}")
    try:
        a, b = (float(operand) for operand in operands)
    except ValueError as exc:
        raise ValueError("Invalid numbers provided") from exc

    result = await capabilities.call_tool(
        context, CONFIG.name, "calculate", {"operation": operation, "a": a, "b": b}
    )
    return f"{operation}({a:g}, {b:g}) = {result:g}"


def build_calculator_agent(
    *,
    logger: Optional[Logger] = None,
    state_manager: Optional[StateManager] = None,
) -> Agent:
    builder = AgentBuilder(CONFIG).with_tool(calculate).with_handler(handle_calculation)
    if logger is not None:
        builder.with_logger(logger)
    if state_manager is not None:
        builder.with_state_manager(state_manager)
    return builder.build()
