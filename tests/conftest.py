"""Shared test fixtures and helpers."""

from datetime import datetime, timezone
from typing import Any, Optional

import pytest

from tenant_intake.agents.intake_agent import IntakeAgent
from tenant_intake.notify.landlord import LandlordNotifier
from tenant_intake.schemas.triage_schema import TriageResult
from tenant_intake.store.document_store import (
    LANDLORDS,
    TENANTS,
    TICKETS,
    InMemoryDocumentStore,
)

TENANT_PHONE = "+15551230001"
LANDLORD_PHONE = "+15559870001"
FROM_NUMBER = "+15550000000"


class StaticClassifier:
    """Classifier double that returns a fixed result and records inputs."""

    def __init__(self, result: Optional[TriageResult] = None) -> None:
        self.result = result or TriageResult()
        self.calls: list[str] = []

    async def classify(self, message_text: str) -> TriageResult:
        self.calls.append(message_text)
        return self.result


class _SentMessage:
    def __init__(self, sid: str) -> None:
        self.sid = sid


class _RecordingMessages:
    def __init__(self, error: Optional[Exception] = None) -> None:
        self.sent: list[dict[str, Any]] = []
        self.error = error

    def create(self, **kwargs: Any) -> _SentMessage:
        self.sent.append(kwargs)
        if self.error is not None:
            raise self.error
        return _SentMessage(sid=f"SM{len(self.sent):04d}")


class RecordingSmsClient:
    """Stands in for ``twilio.rest.Client``; only ``messages.create`` is used."""

    def __init__(self, error: Optional[Exception] = None) -> None:
        self.messages = _RecordingMessages(error)

    @property
    def sent(self) -> list[dict[str, Any]]:
        return self.messages.sent


def make_triage(**kwargs: Any) -> TriageResult:
    return TriageResult(**kwargs)


def seed_ticket(
    store: InMemoryDocumentStore,
    ticket_id: str,
    tenant_id: str = "tenant-1",
    status: str = "open",
    issue_type: Optional[str] = None,
    created_at: Optional[datetime] = None,
    **fields: Any,
) -> None:
    store.seed(TICKETS, ticket_id, {
        "tenantId": tenant_id,
        "landlordId": "landlord-1",
        "unitId": "4B",
        "status": status,
        "issueType": issue_type,
        "emergencyFlag": False,
        "pendingClarification": False,
        "pendingClarificationField": None,
        "createdAt": created_at or datetime(2025, 3, 15, 10, 0, tzinfo=timezone.utc),
        "updatedAt": created_at or datetime(2025, 3, 15, 10, 0, tzinfo=timezone.utc),
        **fields,
    })


@pytest.fixture
def store():
    store = InMemoryDocumentStore()
    store.seed(LANDLORDS, "landlord-1", {"phone": LANDLORD_PHONE, "name": "Pat Owner"})
    store.seed(LANDLORDS, "landlord-nophone", {"name": "No Phone"})
    store.seed(TENANTS, "tenant-1", {
        "phone": TENANT_PHONE,
        "firstName": "Alex",
        "landlordId": "landlord-1",
        "unitId": "4B",
    })
    return store


@pytest.fixture
def sms_client():
    return RecordingSmsClient()


@pytest.fixture
def classifier():
    return StaticClassifier()


@pytest.fixture
def notifier(store, sms_client):
    return LandlordNotifier(store, sms_client, FROM_NUMBER)


@pytest.fixture
def agent(store, classifier, notifier):
    return IntakeAgent(store, classifier, notifier)
