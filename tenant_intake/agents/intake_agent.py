"""
Intake agent: first point of contact for every inbound tenant text.

Per message it resolves the tenant and their open ticket, then either
acknowledges a short follow-up detail or runs the full triage, ticket
update, and landlord alert cycle. The agent keeps no state between calls;
everything it needs is re-read from the document store.
"""

import logging
from typing import Optional

from tenant_intake.conversation.followup import FollowupHeuristic
from tenant_intake.notify.landlord import LandlordNotifier
from tenant_intake.prompts.reply_templates import (
    EMPTY_MESSAGE_REPLY,
    UNKNOWN_SENDER_REPLY,
    compose_followup_reply,
    compose_reply,
)
from tenant_intake.schemas.ticket_schema import Direction, SenderType
from tenant_intake.store.document_store import DocumentStore
from tenant_intake.tools.tenants import find_tenant_by_phone, log_unknown_message
from tenant_intake.tools.tickets import (
    add_ticket_message,
    apply_triage,
    clear_pending_clarification,
    get_or_create_open_ticket,
)
from tenant_intake.triage.classifier import Classifier

logger = logging.getLogger(__name__)


class IntakeAgent:
    """Orchestrates one inbound SMS into a ticket update and a reply."""

    def __init__(
        self,
        store: DocumentStore,
        classifier: Classifier,
        notifier: LandlordNotifier,
        followup: Optional[FollowupHeuristic] = None,
    ) -> None:
        self._store = store
        self._classifier = classifier
        self._notifier = notifier
        self._followup = followup or FollowupHeuristic()

    async def handle_inbound(self, from_number: Optional[str], body: Optional[str]) -> str:
        """Process one inbound text and return the reply for the tenant."""
        from_number = (from_number or "").strip()
        body = (body or "").strip()
        if not from_number or not body:
            logger.info("Empty inbound message")
            return EMPTY_MESSAGE_REPLY

        tenant = await find_tenant_by_phone(self._store, from_number)
        if tenant is None:
            await log_unknown_message(self._store, from_number, body)
            return UNKNOWN_SENDER_REPLY

        ticket = await get_or_create_open_ticket(self._store, tenant)
        await self._log_message(ticket.id, SenderType.TENANT, body, Direction.INBOUND)
        name = tenant.display_name

        followup = self._followup.check(ticket, body)
        if followup.is_followup:
            reply = compose_followup_reply(name, ticket.issue_type)
            if ticket.pending_clarification:
                try:
                    await clear_pending_clarification(self._store, ticket.id)
                except Exception:
                    logger.exception("Could not clear pending clarification on %s", ticket.id)
            await self._log_message(ticket.id, SenderType.SYSTEM, reply, Direction.OUTBOUND)
            return reply

        triage = await self._classifier.classify(body)
        await apply_triage(self._store, ticket.id, triage)
        await self._notifier.notify(tenant, ticket.id, triage, body)

        reply = compose_reply(name, triage)
        await self._log_message(ticket.id, SenderType.SYSTEM, reply, Direction.OUTBOUND)
        return reply

    async def _log_message(
        self, ticket_id: str, sender_type: SenderType, body: str, direction: Direction
    ) -> None:
        # Best effort: a failed log write never blocks the reply.
        try:
            await add_ticket_message(self._store, ticket_id, sender_type, body, direction)
        except Exception:
            logger.exception(
                "Failed to log %s message on ticket %s", direction.value, ticket_id
            )


def build_agent() -> IntakeAgent:
    """Wire the agent's collaborators from configuration, once per process."""
    from tenant_intake.config import settings
    from tenant_intake.notify.landlord import build_sms_client
    from tenant_intake.store.document_store import InMemoryDocumentStore
    from tenant_intake.triage.classifier import build_classifier

    if settings.store.backend == "memory":
        logger.warning("Using in-memory document store; data is lost on restart")
        store: DocumentStore = InMemoryDocumentStore()
    else:
        from tenant_intake.store.firestore_store import create_firestore_store

        store = create_firestore_store(settings.store.firestore_project)

    notifier = LandlordNotifier(store, build_sms_client(), settings.twilio.from_number)
    return IntakeAgent(store, build_classifier(), notifier)
