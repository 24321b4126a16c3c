"""
Strict dashboard records.
Each record is keyed by a stable string id; `raw` keeps the agent's original item.
"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

ConfidenceLevel = Literal["low", "medium", "high", "unknown"]
ProposalActionType = Literal["make_good_invoice", "credit_memo", "plan_amendment", "other"]
ProposalStatus = Literal["draft", "pending_review", "awaiting_approval", "applied"]
MissionType = Literal["plan_vs_invoice", "missing_invoice", "revenue_leakage_overview", "custom"]

PROPOSAL_STATUSES = ("draft", "pending_review", "awaiting_approval", "applied")
MISSION_TYPES = ("plan_vs_invoice", "missing_invoice", "revenue_leakage_overview", "custom")


class DashboardModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class Finding(DashboardModel):
    id: str
    title: str
    summary: Optional[str] = None
    impact_amount: Optional[Union[int, float]] = None
    impact_currency: Optional[str] = None
    impact_text: Optional[str] = None
    confidence: Optional[ConfidenceLevel] = None
    evidence: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    raw: Dict[Any, Any] = {}


class Proposal(DashboardModel):
    id: str
    action_type: ProposalActionType
    title: str
    summary: Optional[str] = None
    amount: Optional[Union[int, float]] = None
    currency: Optional[str] = None
    status: Optional[ProposalStatus] = None
    # A recognized level, or the agent's own label when unrecognized
    confidence: Optional[str] = None
    linked_finding_id: Optional[str] = None
    requested_by: Optional[str] = None
    raw: Dict[Any, Any] = {}


class TraceEntry(DashboardModel):
    id: str
    label: str
    detail: Optional[str] = None
    timestamp: Optional[str] = None
    raw: Dict[Any, Any] = {}


class AuditEntry(DashboardModel):
    id: str
    timestamp: str
    actor: str
    action: str
    details: Optional[str] = None
    raw: Dict[Any, Any] = {}


class MissionContext(DashboardModel):
    mission_type: MissionType = "custom"
    plan_id: Optional[str] = None
    customer_id: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    currency: Optional[str] = None
    notes: Optional[str] = None


DashboardRecord = Union[Finding, Proposal, TraceEntry, AuditEntry]
