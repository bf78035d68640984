"""Ticket and ticket message models."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

CLOSED_STATUSES = frozenset({"completed", "closed"})


class SenderType(str, Enum):
    TENANT = "tenant"
    LANDLORD = "landlord"
    SYSTEM = "system"


class Direction(str, Enum):
    INBOUND = "inbound"
    OUTBOUND = "outbound"


class Ticket(BaseModel):
    """One tenant's maintenance issue, tracked from open to closed."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    tenant_id: str = Field(alias="tenantId")
    landlord_id: Optional[str] = Field(default=None, alias="landlordId")
    unit_id: Optional[str] = Field(default=None, alias="unitId")
    status: Optional[str] = "open"
    issue_type: Optional[str] = Field(default=None, alias="issueType")
    description: Optional[str] = None
    emergency_flag: bool = Field(default=False, alias="emergencyFlag")
    risk_level: Optional[str] = Field(default=None, alias="riskLevel")
    pending_clarification: bool = Field(default=False, alias="pendingClarification")
    pending_clarification_field: Optional[str] = Field(
        default=None, alias="pendingClarificationField"
    )
    location_description: Optional[str] = Field(default=None, alias="locationDescription")
    last_message: Optional[str] = Field(default=None, alias="lastMessage")
    # Firestore hands back its own timestamp type; keep whatever the store returns.
    created_at: Optional[Any] = Field(default=None, alias="createdAt")
    updated_at: Optional[Any] = Field(default=None, alias="updatedAt")

    @field_validator("emergency_flag", "pending_clarification", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool:
        # Other writers may leave these null; anything but a real bool is unset.
        return value if isinstance(value, bool) else False

    @property
    def is_closed(self) -> bool:
        return self.status in CLOSED_STATUSES


class TicketMessage(BaseModel):
    """Append-only record of one message on a ticket."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    ticket_id: str = Field(alias="ticketId")
    sender_type: SenderType = Field(alias="senderType")
    direction: Direction
    body: str
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
