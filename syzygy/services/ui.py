"""Boundary to UI component generators.

The toolkit only moves rendered strings around; generating, parsing or
previewing components belongs to external generators.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Protocol, runtime_checkable

from syzygy.core.models import FunctionTool


class Framework(str, Enum):
    REACT = "react"
    VUE = "vue"
    SVELTE = "svelte"
    ANGULAR = "angular"


@runtime_checkable
class UIComponent(Protocol):
    framework: Framework

    def render(self) -> str:
        ...


@runtime_checkable
class ComponentGenerator(Protocol):
    async def generate_component(self, description: str) -> UIComponent:
        ...


@dataclass(frozen=True, slots=True)
class StaticComponent:
    """Component whose source is known up front."""

    framework: Framework
    source: str

    def render(self) -> str:
        return self.source


class DefaultComponentGenerator:
    """Returns a static React component wrapping the description."""

    async def generate_component(self, description: str) -> UIComponent:
        source = "\n".join(
            [
                "import React from 'react';",
                "const GeneratedComponent = () => (",
                f"  <div>{description}</div>",
                ");",
                "export default GeneratedComponent;",
            ]
        )
        return StaticComponent(framework=Framework.REACT, source=source)


def component_generator_tool(
    generator: ComponentGenerator, name: str = "componentGenerator"
) -> FunctionTool:
    """Expose a generator as a tool taking ``{"description": ...}``."""

    async def generate(params: Mapping[str, Any]) -> UIComponent:
        return await generator.generate_component(str(params.get("description", "")))

    return FunctionTool(name=name, fn=generate, description="Generate a UI component")
