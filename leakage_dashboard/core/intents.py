"""
Tool-intent classification.
Maps an agent tool name, possibly namespaced ("agent.update_findings"), to a dashboard intent.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Intent:
    """A recognized dashboard intent and where its batch lives in the params."""
    name: str
    tool_names: Tuple[str, ...]
    batch_keys: Tuple[str, ...] = ()
    collection: Optional[str] = None


RESET = Intent("reset", ("reset_dashboard", "clear_dashboard", "reset"))
FINDINGS = Intent("findings", ("update_findings", "report_findings"),
                  ("findings", "items", "data"), collection="findings")
PROPOSALS = Intent("proposals", ("update_proposals", "report_proposals"),
                   ("proposals", "items", "data"), collection="proposals")
TRACE = Intent("trace", ("update_trace", "report_trace", "trace_update"),
               ("trace", "steps", "entries", "events"), collection="trace")
AUDIT = Intent("audit", ("update_audit_log", "append_audit_log", "audit_log"),
               ("entries", "events", "log"), collection="audit_log")
MISSION = Intent("mission", ("set_mission", "update_mission_context"), ("mission",))

# Priority order for dispatch
INTENTS = (RESET, FINDINGS, PROPOSALS, TRACE, AUDIT, MISSION)


def tool_name_matches(tool_name: str, candidates: Tuple[str, ...]) -> bool:
    """Exact match, or the candidate as a dotted suffix or prefix."""
    if not isinstance(tool_name, str):
        return False
    return any(
        tool_name == candidate
        or tool_name.endswith(f".{candidate}")
        or tool_name.startswith(f"{candidate}.")
        for candidate in candidates
    )


def classify(tool_name: str) -> Optional[Intent]:
    """Return the first intent whose aliases match, or None for unknown tools."""
    for intent in INTENTS:
        if tool_name_matches(tool_name, intent.tool_names):
            return intent
    return None
