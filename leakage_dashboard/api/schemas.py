"""
API request/response models.
Bodies use camelCase on the wire, matching the dashboard records.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from ..core.records import MissionContext, MissionType


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DashboardEventRequest(ApiModel):
    # Loosely typed; a non-string tool name or non-mapping params are acknowledged and ignored
    tool_name: Optional[Any] = None
    params: Optional[Any] = None


class DashboardEventResponse(ApiModel):
    success: bool


class MissionLaunchRequest(ApiModel):
    mission_type: MissionType
    plan_id: Optional[str] = None
    customer_id: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    currency: Optional[str] = None
    notes: Optional[str] = None

    @field_validator('plan_id', 'customer_id', 'start_date', 'end_date', 'notes')
    @classmethod
    def blank_is_unset(cls, v):
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator('currency')
    @classmethod
    def currency_must_be_code(cls, v):
        if v is None or not v.strip():
            return None
        v = v.strip().upper()
        if len(v) != 3 or not v.isalpha():
            raise ValueError('currency must be a 3-letter code')
        return v

    def to_mission(self) -> MissionContext:
        return MissionContext(**self.model_dump())


class MissionSummaryEntry(ApiModel):
    label: str
    value: str


class MissionSummary(ApiModel):
    title: str
    description: Optional[str] = None
    entries: List[MissionSummaryEntry]


class MissionLaunchResponse(ApiModel):
    success: bool
    brief_sent: bool
    mission_summary: Optional[MissionSummary] = None


class MissionDefinitionResponse(ApiModel):
    value: str
    label: str
    description: str


class ApplyProposalResponse(ApiModel):
    success: bool
    proposal_id: str


class HealthResponse(ApiModel):
    status: str
    version: str
    agent_channel: bool
    counts: Dict[str, int]
    config_issues: List[str]
