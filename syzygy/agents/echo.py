"""Subclass-style agent that remembers what it has heard."""
from __future__ import annotations

from typing import Any, List

from syzygy.agents.base import Agent


class EchoAgent(Agent):
    """Echo the input and keep a running history in the agent's state."""

    history_key = "history"

    async def handle(self, input: Any) -> str:
        history: List[str] = await self.load_state(self.history_key) or []
        history.append(str(input))
        await self.save_state(self.history_key, history)
        return f"{self.config.name} heard {input} ({len(history)} so far)"

    async def history(self) -> List[str]:
        return await self.load_state(self.history_key) or []

    async def forget(self) -> None:
        await self.clear_state()
