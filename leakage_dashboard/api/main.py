"""
Dashboard HTTP API.
Receives agent tool-call events, serves the reconciled dashboard and carries
operator actions (mission launch/reset, proposal application) to the agent.
"""

from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .schemas import (
    ApplyProposalResponse,
    DashboardEventRequest,
    DashboardEventResponse,
    HealthResponse,
    MissionDefinitionResponse,
    MissionLaunchRequest,
    MissionLaunchResponse,
)
from ..agents.router import DashboardEventRouter
from ..core.approval import ProposalApplier, ProposalInFlightError, ProposalNotFoundError
from ..core.config import CORS_ALLOWED_ORIGINS, VERSION, debug_enabled, get_agent_channel, validate_config
from ..core.missions import MISSION_DEFINITIONS, MissionControl, summarize_mission
from ..core.state import DashboardState
from ..util.logging import logger

# Initialize the FastAPI application
app = FastAPI(
    title="Revenue Leakage Dashboard API",
    version=VERSION,
    description="Normalizes agent tool calls into findings, proposals, trace and audit log",
    docs_url="/docs" if debug_enabled() else None,
    redoc_url="/redoc" if debug_enabled() else None
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Session state; one investigation per process
dashboard_state = DashboardState()
agent_channel = get_agent_channel()
event_router = DashboardEventRouter(dashboard_state)
proposal_applier = ProposalApplier(dashboard_state, agent_channel)
mission_control = MissionControl(dashboard_state, agent_channel)

for issue in validate_config():
    logger.warning(f"Configuration issue: {issue}")


@app.get("/health", response_model=HealthResponse)
async def health_check_endpoint():
    """Check system health."""
    issues = validate_config()
    return HealthResponse(
        status="healthy" if not issues else "degraded",
        version=VERSION,
        agent_channel=proposal_applier.channel is not None,
        counts=dashboard_state.counts(),
        config_issues=issues,
    )


@app.post("/events", response_model=DashboardEventResponse)
async def receive_event(request: DashboardEventRequest):
    """Apply one agent tool call. Always acknowledged."""
    return event_router.handle_event(request.tool_name, request.params)


@app.get("/dashboard")
async def get_dashboard() -> Dict[str, Any]:
    """Current findings, proposals, trace, audit log and mission."""
    return dashboard_state.snapshot()


@app.get("/missions/definitions", response_model=List[MissionDefinitionResponse])
def list_mission_definitions():
    return [
        MissionDefinitionResponse(value=d.value, label=d.label, description=d.description)
        for d in MISSION_DEFINITIONS
    ]


@app.post("/missions", response_model=MissionLaunchResponse)
async def launch_mission(request: MissionLaunchRequest):
    """Reset the dashboard, seed the mission context and brief the agent."""
    mission = request.to_mission()
    brief_sent = await mission_control.launch(mission)
    return MissionLaunchResponse(
        success=True,
        brief_sent=brief_sent,
        mission_summary=summarize_mission(dashboard_state.mission),
    )


@app.post("/missions/reset", response_model=DashboardEventResponse)
async def reset_mission():
    await mission_control.reset()
    return DashboardEventResponse(success=True)


@app.post("/proposals/{proposal_id}/apply", response_model=ApplyProposalResponse)
async def apply_proposal(proposal_id: str):
    """Send an operator-approved proposal to the agent."""
    try:
        success = await proposal_applier.apply(proposal_id)
    except ProposalNotFoundError:
        raise HTTPException(status_code=404, detail=f"Proposal not found: {proposal_id}")
    except ProposalInFlightError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return ApplyProposalResponse(success=success, proposal_id=proposal_id)
