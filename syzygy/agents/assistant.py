"""Assistant-style agents: a mock chat agent and a UI generating agent."""
from __future__ import annotations

from typing import Any, Optional

from syzygy.agents import capabilities
from syzygy.agents.base import Agent
from syzygy.agents.builder import AgentBuilder
from syzygy.core.models import AgentConfig, AgentContext, Logger
from syzygy.services.tools import mock_chat_completion
from syzygy.services.ui import ComponentGenerator, DefaultComponentGenerator, component_generator_tool
from syzygy.state.manager import StateManager

CHAT = AgentConfig(name="OpenAIAgent", description="Interacts with a chat completion tool")
UI = AgentConfig(name="UIAgent", description="Generates UI code")


def build_chat_agent(
    model: str = "gpt-3.5-turbo",
    *,
    logger: Optional[Logger] = None,
    state_manager: Optional[StateManager] = None,
) -> Agent:
    """Agent answering prompts through the ``openai`` tool and remembering the last one."""

    async def handle_prompt(input: Any, context: AgentContext) -> str:
        response = await capabilities.call_tool(
            context, CHAT.name, "openai", {"prompt": str(input), "model": model}
        )
        await capabilities.save_state(context, CHAT.name, "last_prompt", str(input))
        choices = response.get("choices") or []
        if not choices:
            return "No response generated"
        return choices[0]["message"]["content"]

    builder = AgentBuilder(CHAT).with_tool(mock_chat_completion).with_handler(handle_prompt)
    if logger is not None:
        builder.with_logger(logger)
    if state_manager is not None:
        builder.with_state_manager(state_manager)
    return builder.build()


def build_ui_agent(
    generator: Optional[ComponentGenerator] = None,
    *,
    logger: Optional[Logger] = None,
) -> Agent:
    async def handle_ui(input: Any, context: AgentContext) -> str:
        text = str(input)
        if "generate UI" not in text:
            return f"UIAgent processed: {text}"
        component = await capabilities.call_tool(
            context, UI.name, "componentGenerator", {"description": "A sleek dashboard component"}
        )
        return f"Generated UI:\n{component.render()}"

    builder = (
        AgentBuilder(UI)
        .with_tool(component_generator_tool(generator or DefaultComponentGenerator()))
        .with_handler(handle_ui)
    )
    if logger is not None:
        builder.with_logger(logger)
    return builder.build()
