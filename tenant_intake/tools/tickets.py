"""
Ticket resolution, message logging, and triage updates.

At most one ticket per tenant is treated as open, but only by convention:
the latest ticket is reused unless it is completed or closed. Two messages
from the same tenant arriving together can both create a ticket.
"""

import logging
from typing import Optional

from tenant_intake.schemas.tenant_schema import Tenant
from tenant_intake.schemas.ticket_schema import Direction, SenderType, Ticket, TicketMessage
from tenant_intake.schemas.triage_schema import TriageResult
from tenant_intake.store.document_store import (
    SERVER_TIMESTAMP,
    TICKET_MESSAGES,
    TICKETS,
    DocumentStore,
    StoreError,
)

logger = logging.getLogger(__name__)

LOCATION_FIELD = "location"


async def get_latest_ticket(store: DocumentStore, tenant_id: str) -> Optional[Ticket]:
    docs = await store.query(
        TICKETS, "tenantId", tenant_id, order_by="createdAt", descending=True, limit=1
    )
    return Ticket.model_validate(docs[0]) if docs else None


async def get_or_create_open_ticket(store: DocumentStore, tenant: Tenant) -> Ticket:
    """Reuse the tenant's latest ticket unless it is closed, else open a new one."""
    latest = await get_latest_ticket(store, tenant.id)
    if latest is not None and not latest.is_closed:
        logger.info("Reusing ticket %s (status=%s)", latest.id, latest.status)
        return latest

    ticket_id = await store.add(TICKETS, {
        "tenantId": tenant.id,
        "landlordId": tenant.landlord_id,
        "unitId": tenant.unit_id,
        "status": "open",
        "issueType": None,
        "description": None,
        "emergencyFlag": False,
        "riskLevel": None,
        "pendingClarification": False,
        "pendingClarificationField": None,
        "locationDescription": None,
        "createdAt": SERVER_TIMESTAMP,
        "updatedAt": SERVER_TIMESTAMP,
    })
    doc = await store.get(TICKETS, ticket_id)
    if doc is None:
        raise StoreError(f"Ticket {ticket_id} vanished after creation")
    logger.info("Ticket created: %s for tenant %s", ticket_id, tenant.id)
    return Ticket.model_validate(doc)


async def add_ticket_message(
    store: DocumentStore,
    ticket_id: str,
    sender_type: SenderType,
    body: str,
    direction: Direction,
) -> None:
    """Append a message to the ticket and stamp the ticket as freshly updated."""
    message = TicketMessage(
        ticket_id=ticket_id, sender_type=sender_type, direction=direction, body=body
    )
    record = message.model_dump(by_alias=True, mode="json", exclude={"created_at"})
    record["createdAt"] = SERVER_TIMESTAMP
    await store.add(TICKET_MESSAGES, record)
    await store.update(TICKETS, ticket_id, {
        "updatedAt": SERVER_TIMESTAMP,
        "lastMessage": body,
    })


async def apply_triage(store: DocumentStore, ticket_id: str, triage: TriageResult) -> None:
    """Copy the triage fields the ticket tracks onto the ticket."""
    await store.update(TICKETS, ticket_id, {
        "issueType": triage.issue_type.value,
        "emergencyFlag": triage.emergency,
        "riskLevel": triage.risk_level.value,
        "pendingClarification": triage.needs_clarification,
        "pendingClarificationField": LOCATION_FIELD if triage.asks_for_location else None,
        "updatedAt": SERVER_TIMESTAMP,
    })
    logger.info(
        "Ticket %s triaged: type=%s emergency=%s clarification=%s",
        ticket_id, triage.issue_type.value, triage.emergency, triage.needs_clarification,
    )


async def clear_pending_clarification(store: DocumentStore, ticket_id: str) -> None:
    await store.update(TICKETS, ticket_id, {
        "pendingClarification": False,
        "pendingClarificationField": None,
        "updatedAt": SERVER_TIMESTAMP,
    })
