"""
Triage result model with boundary validation.

The classifier's output comes from a language model, so every field is
coerced on the way in: a value outside its enum or of the wrong type is
replaced by that field's safe default instead of raising.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class IssueType(str, Enum):
    PLUMBING = "plumbing"
    HVAC = "hvac"
    ELECTRICAL = "electrical"
    APPLIANCE = "appliance"
    SECURITY = "security"
    GENERAL = "general"
    QUESTION = "question"
    OTHER = "other"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def _coerce_bool(value: Any) -> bool:
    # Only real booleans count; "false" as a string must not become True.
    return value if isinstance(value, bool) else False


class MissingFields(BaseModel):
    """Which details the tenant has not given yet."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    location: bool = False
    access_window: bool = Field(default=False, alias="accessWindow")
    severity: bool = False
    fixture: bool = False

    @field_validator("location", "access_window", "severity", "fixture", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool:
        return _coerce_bool(value)


class TriageResult(BaseModel):
    """Classification of one tenant message. Never persisted as a whole."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    issue_type: IssueType = Field(default=IssueType.GENERAL, alias="issueType")
    emergency: bool = False
    risk_level: RiskLevel = Field(default=RiskLevel.LOW, alias="riskLevel")
    needs_clarification: bool = Field(default=False, alias="needsClarification")
    clarification_question: Optional[str] = Field(default=None, alias="clarificationQuestion")
    missing_fields: MissingFields = Field(default_factory=MissingFields, alias="missingFields")

    @field_validator("issue_type", mode="before")
    @classmethod
    def _issue_type(cls, value: Any) -> IssueType:
        if isinstance(value, str):
            try:
                return IssueType(value.strip().lower())
            except ValueError:
                pass
        return IssueType.GENERAL

    @field_validator("risk_level", mode="before")
    @classmethod
    def _risk_level(cls, value: Any) -> RiskLevel:
        if isinstance(value, str):
            try:
                return RiskLevel(value.strip().lower())
            except ValueError:
                pass
        return RiskLevel.LOW

    @field_validator("emergency", "needs_clarification", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool:
        return _coerce_bool(value)

    @field_validator("clarification_question", mode="before")
    @classmethod
    def _question(cls, value: Any) -> Optional[str]:
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    @field_validator("missing_fields", mode="before")
    @classmethod
    def _missing(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, MissingFields)) else {}

    @model_validator(mode="after")
    def _question_required(self) -> "TriageResult":
        # A clarification with nothing to ask is no clarification.
        if self.needs_clarification and not self.clarification_question:
            self.needs_clarification = False
        return self

    @property
    def asks_for_location(self) -> bool:
        return self.needs_clarification and self.missing_fields.location


PHOTO_REQUEST_QUESTION = "Can you send a photo and a short description of what's going on?"


def default_triage(ask_for_photo: bool = False) -> TriageResult:
    """Safe result used whenever classification cannot be trusted."""
    if ask_for_photo:
        return TriageResult(
            needs_clarification=True,
            clarification_question=PHOTO_REQUEST_QUESTION,
        )
    return TriageResult()
