"""
Dashboard event router.

Every agent tool call passes through here:
classify tool name -> extract batch -> normalize records -> reconcile collection.

The router always acknowledges with {"success": True}. A malformed or unknown
tool call must never abort the agent's turn; unknown tools are only logged.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional

from ..core.config import debug_enabled
from ..core.intents import Intent, classify
from ..core.missions import coerce_mission_payload, merge_mission
from ..core.normalizers import (
    normalize_audit_entries,
    normalize_findings,
    normalize_proposals,
    normalize_trace_entries,
)
from ..core.payload import extract_list, is_replace_flag
from ..core.state import DashboardState
from ..util.logging import logger

ACKNOWLEDGED = {"success": True}


class DashboardEventRouter:
    """Routes agent tool-call events into dashboard state."""

    def __init__(self, state: Optional[DashboardState] = None):
        self.state = state if state is not None else DashboardState()
        self.normalizers: Dict[str, Callable[[List[Any]], List[Any]]] = {
            "findings": normalize_findings,
            "proposals": normalize_proposals,
            "trace": normalize_trace_entries,
            "audit_log": normalize_audit_entries,
        }
        self._stats = {"events_handled": 0, "events_unhandled": 0, "events_failed": 0}

    def handle_event(self, tool_name: Any, params: Any = None) -> Dict[str, Any]:
        """
        Apply one agent tool call to the dashboard.

        Args:
            tool_name: Tool name as sent by the agent, possibly namespaced
            params: Parameter bag; None is treated as an empty bag

        Returns:
            Acknowledgement, always {"success": True}
        """
        if params is None:
            params = {}
        if not isinstance(params, Mapping):
            logger.log_dashboard_event(str(tool_name), "none", "ignored", {"reason": "params_not_mapping"})
            return dict(ACKNOWLEDGED)

        intent = classify(tool_name)
        if intent is None:
            self._stats["events_unhandled"] += 1
            if debug_enabled():
                logger.log_unhandled_tool(str(tool_name), params)
            return dict(ACKNOWLEDGED)

        try:
            details = self._apply_intent(intent, params)
            self._stats["events_handled"] += 1
            logger.log_dashboard_event(tool_name, intent.name, "success", details)
        except Exception as e:
            # State cells are only assigned after a merge succeeds
            self._stats["events_failed"] += 1
            logger.error(f"Dashboard event {tool_name} failed: {e}")
            logger.log_dashboard_event(tool_name, intent.name, "failed", {"error": str(e)[:100]})

        return dict(ACKNOWLEDGED)

    def dispatch(self, event: Mapping[str, Any]) -> Dict[str, Any]:
        """Handle an event shaped {"toolName": ..., "params": ...}."""
        if not isinstance(event, Mapping):
            return dict(ACKNOWLEDGED)
        tool_name = event.get("toolName", event.get("tool_name", ""))
        return self.handle_event(tool_name, event.get("params"))

    def _apply_intent(self, intent: Intent, params: Mapping[str, Any]) -> Dict[str, Any]:
        if intent.name == "reset":
            self.state.reset()
            return {"cleared": True}

        if intent.name == "mission":
            mission_payload = params.get("mission")
            if not isinstance(mission_payload, Mapping):
                return {"mission_updated": False}
            self.state.mission = merge_mission(self.state.mission, coerce_mission_payload(mission_payload))
            return {"mission_updated": True, "mission_type": self.state.mission.mission_type}

        replace = is_replace_flag(params)
        batch = extract_list(params, intent.batch_keys)
        records = self.normalizers[intent.collection](batch)
        total = self.state.apply_batch(intent.collection, records, replace)
        logger.log_batch_reconciled(intent.collection, len(records), total, replace)
        return {
            "received": len(batch),
            "accepted": len(records),
            "total": total,
        }

    def get_stats(self) -> Dict[str, int]:
        return dict(self._stats)
