"""Example tools used by the demo pipelines and the HTTP harness."""
from __future__ import annotations

import asyncio
import html
import json
import operator
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from syzygy.core.models import FunctionTool, tool

OPERATIONS = {
    "add": operator.add,
    "subtract": operator.sub,
    "multiply": operator.mul,
    "divide": operator.truediv,
}

MOCK_SOURCES: Dict[str, List[Dict[str, Any]]] = {
    "users": [
        {"id": 1, "name": "Alice", "role": "admin"},
        {"id": 2, "name": "Bob", "role": "user"},
    ],
    "products": [
        {"id": 1, "name": "Widget", "price": 99.99},
        {"id": 2, "name": "Gadget", "price": 149.99},
    ],
}


class CalculateParams(BaseModel):
    operation: str
    a: float
    b: float


class FetchDataParams(BaseModel):
    source: str


class TransformParams(BaseModel):
    data: List[Dict[str, Any]] = Field(default_factory=list)
    format: str = "json"


class ChatParams(BaseModel):
    prompt: str
    model: str = "gpt-3.5-turbo"


@tool("calculate", params_model=CalculateParams)
async def calculate(params: CalculateParams) -> float:
    """Apply a basic arithmetic operation to two numbers."""
    if params.operation not in OPERATIONS:
        raise ValueError(f"Unknown operation: {params.operation}")
    if params.operation == "divide" and params.b == 0:
        raise ZeroDivisionError("Division by zero")
    return OPERATIONS[params.operation](params.a, params.b)


@tool("fetchData", params_model=FetchDataParams)
async def fetch_data(params: FetchDataParams) -> List[Dict[str, Any]]:
    """Return mock records for a named source; unknown sources yield nothing."""
    await asyncio.sleep(0)  # Simulate I/O
    return [dict(row) for row in MOCK_SOURCES.get(params.source.strip().lower(), [])]


@tool("transform", params_model=TransformParams)
async def transform(params: TransformParams) -> str:
    """Render records as csv, an html table, or indented json."""
    data = params.data
    if params.format == "csv":
        if not data:
            return ""
        headers = ",".join(data[0].keys())
        rows = [",".join(str(value) for value in item.values()) for item in data]
        return "\n".join([headers, *rows])
    if params.format == "html":
        if not data:
            return "<table></table>"
        header_cells = "".join(f"<th>{html.escape(str(h))}</th>" for h in data[0].keys())
        body = "".join(
            "<tr>" + "".join(f"<td>{html.escape(str(v))}</td>" for v in item.values()) + "</tr>"
            for item in data
        )
        return f"<table><thead><tr>{header_cells}</tr></thead><tbody>{body}</tbody></table>"
    return json.dumps(data, indent=2)


@tool("openai", params_model=ChatParams)
async def mock_chat_completion(params: ChatParams) -> Dict[str, Any]:
    """Chat-completion shaped response without calling any model."""
    await asyncio.sleep(0)
    prompt = params.prompt.lower()
    if "joke" in prompt:
        content = "Why don't programmers like nature? It has too many bugs!"
    elif "quote" in prompt:
        content = "Code is like humor. When you have to explain it, it's bad. - Cory House"
    else:
        content = f"Here's a response to: {params.prompt}"
    return {
        "model": params.model,
        "choices": [{"message": {"role": "assistant", "content": content}, "finish_reason": "stop"}],
    }


EXAMPLE_TOOLS: Dict[str, FunctionTool] = {
    t.name: t for t in (calculate, fetch_data, transform, mock_chat_completion)
}
