"""CLI demonstration of agents, pipelines and per-agent state."""
from __future__ import annotations

import asyncio

from syzygy.agents.calculator import build_calculator_agent
from syzygy.agents.data import build_fetcher_agent, build_transformer_agent
from syzygy.agents.echo import EchoAgent
from syzygy.config import config
from syzygy.core.log import ConsoleLogger, configure_logging
from syzygy.core.models import AgentConfig, AgentContext
from syzygy.orchestration.orchestrator import AgentOrchestrator
from syzygy.runtime import build_state_manager, close_state_manager, get_pipeline


async def main() -> None:
    configure_logging(config.log_level, config.log_format)
    errors = ConsoleLogger("demo")

    calculator = build_calculator_agent()
    for request in ("add 5 3", "multiply 6 4", "divide 10 2"):
        print(await calculator.run(request))

    fetcher = build_fetcher_agent()
    workflow = (
        AgentOrchestrator.create(name="workflow")
        .add(fetcher)
        .add(build_transformer_agent("csv"))
        .on_error(lambda exc: errors.error("Workflow error", exc))
    )
    print("Users as CSV:")
    print(await workflow.run_sequential("users"))

    fan_out = AgentOrchestrator.create(name="fan-out").add(fetcher).add(fetcher)
    fanned, products = await asyncio.gather(fan_out.run_parallel("users"), fetcher.run("products"))
    print(f"Parallel fetched {len(fanned)} result sets; products: {products}")

    state_manager = build_state_manager(config)
    echo = EchoAgent(
        AgentConfig(name="demo-echo"),
        AgentContext(logger=ConsoleLogger("demo-echo"), state_manager=state_manager),
    )
    await echo.run("Hello agent")
    print(await echo.run("Hello again"))
    print(f"History: {await echo.history()}")
    await echo.forget()
    await close_state_manager(state_manager)

    showcase = get_pipeline("ui-showcase")
    print(await showcase.orchestrator.run_sequential("Please generate UI"))


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
