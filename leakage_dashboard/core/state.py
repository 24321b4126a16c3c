"""
Session-scoped dashboard state.

The four record collections and the mission context are single-writer cells:
they are only reassigned with the result of a merge, never edited in place.
Dispatch is serialized, so no locking is needed here.
"""

from typing import Any, Dict, List, Optional, Set

from .missions import summarize_mission
from .records import AuditEntry, DashboardRecord, Finding, MissionContext, Proposal, TraceEntry
from .reconcile import merge_records

COLLECTIONS = ("findings", "proposals", "trace", "audit_log")


class DashboardState:
    """In-memory state for one investigation session."""

    def __init__(self):
        self.findings: List[Finding] = []
        self.proposals: List[Proposal] = []
        self.trace: List[TraceEntry] = []
        self.audit_log: List[AuditEntry] = []
        self.mission: Optional[MissionContext] = None
        self.applying_proposal_ids: Set[str] = set()
        self.is_launching_mission = False

    def clear_collections(self):
        """Empty all four collections; mission context is kept."""
        self.findings = []
        self.proposals = []
        self.trace = []
        self.audit_log = []

    def reset(self):
        """Empty all collections and clear the mission context."""
        self.clear_collections()
        self.mission = None

    def apply_batch(self, collection: str, incoming: List[DashboardRecord], replace: bool = False) -> int:
        """Reconcile a normalized batch into a collection and return its new size."""
        if collection not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {collection}")

        merged = merge_records(getattr(self, collection), incoming, replace)
        setattr(self, collection, merged)
        return len(merged)

    def get_proposal(self, proposal_id: str) -> Optional[Proposal]:
        for proposal in self.proposals:
            if proposal.id == proposal_id:
                return proposal
        return None

    def counts(self) -> Dict[str, int]:
        return {name: len(getattr(self, name)) for name in COLLECTIONS}

    def snapshot(self) -> Dict[str, Any]:
        """Wire form of the whole dashboard (camelCase keys)."""
        return {
            "findings": [record.to_wire() for record in self.findings],
            "proposals": [record.to_wire() for record in self.proposals],
            "trace": [record.to_wire() for record in self.trace],
            "auditLog": [record.to_wire() for record in self.audit_log],
            "mission": self.mission.to_wire() if self.mission else None,
            "missionSummary": summarize_mission(self.mission),
            "applyingProposalIds": sorted(self.applying_proposal_ids),
            "isLaunchingMission": self.is_launching_mission,
        }
