"""HTTP API exposing the registered pipelines and agents."""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from syzygy.agents.base import Agent
from syzygy.core.errors import SyzygyError
from syzygy.runtime import PARALLEL, Pipeline, get_agents, get_pipelines

router = APIRouter(tags=["pipelines"])


class PipelineResponse(BaseModel):
    name: str
    mode: str
    description: Optional[str]
    nodes: List[str]

    @classmethod
    def from_pipeline(cls, pipeline: Pipeline) -> "PipelineResponse":
        return cls(
            name=pipeline.name,
            mode=pipeline.mode,
            description=pipeline.description,
            nodes=pipeline.orchestrator.describe(),
        )


class RunRequest(BaseModel):
    input: Any = Field(None, description="Initial input handed to the first node(s)")
    mode: Optional[Literal["sequential", "parallel"]] = Field(
        None, description="Defaults to the pipeline's own mode"
    )


class RunResponse(BaseModel):
    pipeline: str
    mode: str
    result: Any


class AgentResponse(BaseModel):
    name: str
    description: Optional[str]
    tools: List[str]

    @classmethod
    def from_agent(cls, agent: Agent) -> "AgentResponse":
        return cls(**agent.describe())


@router.get("/pipelines", response_model=List[PipelineResponse])
async def list_pipelines(
    pipelines: Dict[str, Pipeline] = Depends(get_pipelines),
) -> List[PipelineResponse]:
    return [PipelineResponse.from_pipeline(pipeline) for pipeline in pipelines.values()]


@router.post("/pipelines/{name}/run", response_model=RunResponse)
async def run_pipeline(
    name: str,
    request: RunRequest,
    pipelines: Dict[str, Pipeline] = Depends(get_pipelines),
) -> RunResponse:
    pipeline = pipelines.get(name)
    if pipeline is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown pipeline")

    mode = request.mode or pipeline.mode
    try:
        if mode == PARALLEL:
            result = await pipeline.orchestrator.run_parallel(request.input)
        else:
            result = await pipeline.orchestrator.run_sequential(request.input)
    except (SyzygyError, ValueError, ArithmeticError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return RunResponse(pipeline=name, mode=mode, result=result)


@router.get("/agents", response_model=List[AgentResponse])
async def list_agents(agents: Dict[str, Agent] = Depends(get_agents)) -> List[AgentResponse]:
    return [AgentResponse.from_agent(agent) for agent in agents.values()]
