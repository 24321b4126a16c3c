"""
Record normalizers.

One decoder per record kind. Each maps a raw batch item to a strict record
or rejects it; items that are not key-value mappings contribute nothing and
never abort the batch. Positional defaults are 1-based.
"""

from typing import Any, Callable, List, Mapping, Optional, TypeVar

from .coercion import (
    extract_impact,
    first_text,
    first_value,
    format_amount,
    normalize_token,
    to_confidence,
    to_currency_code,
    to_enum,
    to_id,
    to_number,
    to_text,
    to_text_list,
    to_timestamp,
    utc_now_iso,
)
from .records import PROPOSAL_STATUSES, AuditEntry, Finding, Proposal, TraceEntry

R = TypeVar("R")

to_status = to_enum(PROPOSAL_STATUSES)

# First match wins
ACTION_TYPE_KEYWORDS = (
    (("make", "invoice"), "make_good_invoice"),
    (("credit",), "credit_memo"),
    (("amend",), "plan_amendment"),
)


def to_proposal_action_type(value: Any) -> str:
    """Classify free-text action descriptions into a proposal action type."""
    text = to_text(value)
    if text is None:
        return "other"

    normalized = normalize_token(text)
    for keywords, action_type in ACTION_TYPE_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return action_type
    return "other"


def _normalize_batch(items: List[Any], decode: Callable[[Mapping[str, Any], int], R]) -> List[R]:
    records = []
    for index, item in enumerate(items):
        if not isinstance(item, Mapping):
            continue
        records.append(decode(item, index))
    return records


def decode_finding(record: Mapping[str, Any], index: int) -> Finding:
    position = index + 1
    impact = extract_impact(first_value(record, "impact", "impact_summary", "value"))
    impact_text = impact.text
    if impact_text is None and impact.amount is not None and impact.currency:
        impact_text = f"{impact.currency} {format_amount(impact.amount)}"

    return Finding(
        id=to_id(first_value(record, "id", "finding_id", "key"), position, prefix="finding"),
        title=first_text(record, "title", "name", "summary") or "Untitled finding",
        summary=first_text(record, "summary", "description", "detail"),
        impact_amount=impact.amount,
        impact_currency=impact.currency,
        impact_text=impact_text,
        confidence=to_confidence(first_value(record, "confidence", "confidence_level", "score")),
        evidence=to_text_list(first_value(record, "evidence", "supporting_evidence")),
        tags=to_text_list(record.get("tags")),
        raw=dict(record),
    )


def decode_proposal(record: Mapping[str, Any], index: int) -> Proposal:
    position = index + 1
    action_type = to_proposal_action_type(first_value(record, "action_type", "type"))
    raw_confidence = first_value(record, "confidence", "confidence_level", "score")

    return Proposal(
        id=to_id(first_value(record, "id", "proposal_id", "key"), position, prefix="proposal"),
        action_type=action_type,
        title=first_text(record, "title", "summary") or f"{action_type} proposal",
        summary=first_text(record, "summary", "description"),
        amount=to_number(first_value(record, "amount", "total", "value")),
        currency=to_currency_code(first_value(record, "currency", "ccy")),
        status=to_status(first_value(record, "status", "state")),
        confidence=to_confidence(raw_confidence) or to_text(raw_confidence),
        linked_finding_id=to_text(first_value(record, "linked_finding_id", "finding_id")),
        requested_by=to_text(first_value(record, "requested_by", "requester")),
        raw=dict(record),
    )


def decode_trace_entry(record: Mapping[str, Any], index: int) -> TraceEntry:
    position = index + 1
    return TraceEntry(
        id=to_id(first_value(record, "id", "step_id", "key"), position, prefix="trace"),
        label=first_text(record, "label", "step") or f"Step {position}",
        detail=first_text(record, "detail", "summary", "thought"),
        timestamp=to_timestamp(first_value(record, "timestamp", "at", "time")),
        raw=dict(record),
    )


def decode_audit_entry(record: Mapping[str, Any], index: int, now: Optional[str] = None) -> AuditEntry:
    position = index + 1
    timestamp = to_timestamp(first_value(record, "timestamp", "at", "executed_at"))
    return AuditEntry(
        id=to_id(first_value(record, "id", "event_id", "key"), position, prefix="audit"),
        timestamp=timestamp or now or utc_now_iso(),
        actor=first_text(record, "actor", "user", "principal") or "Agent",
        action=first_text(record, "action", "type") or "Action",
        details=first_text(record, "details", "summary", "description"),
        raw=dict(record),
    )


def normalize_findings(items: List[Any]) -> List[Finding]:
    return _normalize_batch(items, decode_finding)


def normalize_proposals(items: List[Any]) -> List[Proposal]:
    return _normalize_batch(items, decode_proposal)


def normalize_trace_entries(items: List[Any]) -> List[TraceEntry]:
    return _normalize_batch(items, decode_trace_entry)


def normalize_audit_entries(items: List[Any]) -> List[AuditEntry]:
    """Entries without a timestamp share the moment the batch was reconciled."""
    now = utc_now_iso()
    return _normalize_batch(items, lambda record, index: decode_audit_entry(record, index, now))
