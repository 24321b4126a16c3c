"""
Missions: operator-declared investigation scopes.

Launching a mission clears the dashboard, seeds the mission context and sends
the agent a brief on a fresh thread.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from .coercion import first_value, normalize_token, to_currency_code, to_text
from .records import MISSION_TYPES, MissionContext
from ..util.logging import logger


@dataclass(frozen=True)
class MissionDefinition:
    value: str
    label: str
    description: str


MISSION_DEFINITIONS = (
    MissionDefinition(
        "plan_vs_invoice",
        "Plan vs Invoice Mismatch",
        "Compare contracted plans with billed invoices to spot over/under billing",
    ),
    MissionDefinition(
        "missing_invoice",
        "Missing Invoice Sweep",
        "Scan ledgers for months or entitlements that were never invoiced",
    ),
    MissionDefinition(
        "revenue_leakage_overview",
        "Revenue Leakage Overview",
        "Summarize anomalies across all customers and flag the biggest gaps",
    ),
    MissionDefinition(
        "custom",
        "Custom Investigation",
        "Send bespoke instructions to the agent with optional notes and filters",
    ),
)


def get_mission_definition(mission_type: str) -> Optional[MissionDefinition]:
    for definition in MISSION_DEFINITIONS:
        if definition.value == mission_type:
            return definition
    return None


def to_mission_type(value: Any) -> str:
    """Exact match on the known mission types, anything else is custom."""
    text = to_text(value)
    if text is None:
        return "custom"
    normalized = normalize_token(text)
    return normalized if normalized in MISSION_TYPES else "custom"


def coerce_mission_payload(value: Mapping[str, Any]) -> MissionContext:
    """Build a mission context from an agent-supplied mapping."""
    return MissionContext(
        mission_type=to_mission_type(first_value(value, "missionType", "type")),
        plan_id=to_text(first_value(value, "planId", "plan_id")),
        customer_id=to_text(first_value(value, "customerId", "customer_id")),
        start_date=to_text(first_value(value, "startDate", "start_date")),
        end_date=to_text(first_value(value, "endDate", "end_date")),
        currency=to_currency_code(first_value(value, "currency", "ccy")),
        notes=to_text(first_value(value, "notes", "description")),
    )


def merge_mission(current: Optional[MissionContext], incoming: MissionContext) -> MissionContext:
    """Shallow merge; the incoming payload overrides every field, unset ones included."""
    if current is None:
        return incoming
    return current.model_copy(update=dict(incoming))


def build_mission_brief(mission: MissionContext) -> str:
    """Free-text brief sent to the agent when a mission launches."""
    definition = get_mission_definition(mission.mission_type)
    label = definition.label if definition else mission.mission_type.replace("_", " ")

    lines = [
        f"Mission: {label}",
        "You are the financial detective. Investigate revenue leakage using the JSON datasets "
        "provided (billing_plans, invoices, credit_memos, exchange_rates).",
    ]
    if mission.plan_id:
        lines.append(f"Focus Plan ID: {mission.plan_id}")
    if mission.customer_id:
        lines.append(f"Customer ID: {mission.customer_id}")
    if mission.start_date or mission.end_date:
        lines.append(f"Period: {mission.start_date or '?'} -> {mission.end_date or '?'}")
    if mission.currency:
        lines.append(f"Preferred currency for summaries: {mission.currency}")
    if mission.notes:
        lines.append(f"Operator notes: {mission.notes}")
    lines.append(
        "Report structured findings via the update_findings tool, draft remediations via "
        "update_proposals, provide reasoning trace updates, and wait for explicit Apply actions "
        "before using the apply tool. Include evidence references and amounts in all outputs."
    )
    return "\n".join(lines)


def summarize_mission(mission: Optional[MissionContext]) -> Optional[Dict[str, Any]]:
    """Title, description and label/value entries for the active mission panel."""
    if mission is None:
        return None

    definition = get_mission_definition(mission.mission_type)
    entries: List[Dict[str, str]] = []
    if mission.plan_id:
        entries.append({"label": "Plan", "value": mission.plan_id})
    if mission.customer_id:
        entries.append({"label": "Customer", "value": mission.customer_id})
    if mission.start_date or mission.end_date:
        period = f"{mission.start_date or '?'} → {mission.end_date or '?'}"
        entries.append({"label": "Period", "value": period})
    if mission.currency:
        entries.append({"label": "Currency", "value": mission.currency})
    if mission.notes:
        entries.append({"label": "Notes", "value": mission.notes})

    return {
        "title": definition.label if definition else mission.mission_type,
        "description": definition.description if definition else None,
        "entries": entries,
    }


class MissionControl:
    """Launches and resets missions against the dashboard state and agent channel."""

    def __init__(self, state, channel=None):
        self.state = state
        self.channel = channel

    async def launch(self, mission: MissionContext) -> bool:
        """
        Seed a new mission and brief the agent.

        Returns:
            True if the brief reached the agent, False if it was only stored locally
        """
        self.state.is_launching_mission = True
        self.state.mission = mission
        self.state.clear_collections()

        if self.channel is None:
            logger.warning("Agent channel not ready yet. Mission context stored locally.")
            logger.log_mission_event("launch", mission.mission_type, "stored_locally")
            self.state.is_launching_mission = False
            return False

        try:
            await self.channel.reset_thread()
            await self.channel.send_user_message(build_mission_brief(mission), new_thread=True)
            logger.log_mission_event("launch", mission.mission_type)
            return True
        except Exception as e:
            logger.error(f"Failed to launch mission: {e}")
            logger.log_mission_event("launch", mission.mission_type, "failed")
            return False
        finally:
            self.state.is_launching_mission = False

    async def reset(self):
        """Clear the dashboard and detach from the agent thread."""
        self.state.reset()
        logger.log_mission_event("reset")

        if self.channel is not None:
            try:
                await self.channel.reset_thread()
            except Exception as e:
                logger.error(f"Failed to reset agent thread: {e}")
