"""
Landlord SMS alerts.

An alert goes out only when every piece is in place: the tenant has a
landlord, the landlord has a phone on file, and the Twilio client plus
sender number are configured. Anything missing skips the alert; a failed
send is logged. Neither case is retried or affects the tenant's reply.
"""

import asyncio
import logging
from typing import Optional

from twilio.rest import Client

from tenant_intake.config import TwilioConfig, settings
from tenant_intake.prompts.reply_templates import build_landlord_summary
from tenant_intake.schemas.tenant_schema import Tenant
from tenant_intake.schemas.triage_schema import TriageResult
from tenant_intake.store.document_store import DocumentStore
from tenant_intake.tools.tenants import get_landlord_by_id

logger = logging.getLogger(__name__)


def build_sms_client(config: Optional[TwilioConfig] = None) -> Optional[Client]:
    """Create the Twilio client once at start-up, or None when credentials are missing."""
    config = config or settings.twilio
    if not config.is_configured:
        return None
    return Client(config.account_sid, config.auth_token)


class LandlordNotifier:
    """Sends the landlord a one-SMS summary of a triaged tenant message."""

    def __init__(
        self,
        store: DocumentStore,
        client: Optional[Client],
        from_number: Optional[str],
    ) -> None:
        self._store = store
        self._client = client
        self._from_number = from_number

    @property
    def is_configured(self) -> bool:
        return self._client is not None and bool(self._from_number)

    async def notify(
        self, tenant: Tenant, ticket_id: str, triage: TriageResult, body: str
    ) -> bool:
        """Alert the tenant's landlord. Returns True only if an SMS was accepted."""
        if not tenant.landlord_id:
            logger.debug("Tenant %s has no landlord; skipping alert", tenant.id)
            return False
        if not self.is_configured:
            logger.debug("SMS transport not configured; skipping landlord alert")
            return False

        try:
            landlord = await get_landlord_by_id(self._store, tenant.landlord_id)
            if landlord is None or not landlord.phone:
                logger.info("Landlord %s has no phone on file; skipping alert", tenant.landlord_id)
                return False

            text = build_landlord_summary(
                tenant.display_name, tenant.unit_id, ticket_id, triage, body
            )
            message = await asyncio.to_thread(
                self._client.messages.create,
                from_=self._from_number,
                to=landlord.phone,
                body=text,
            )
        except Exception:
            logger.exception("Landlord alert failed for ticket %s", ticket_id)
            return False

        logger.info(
            "Landlord %s alerted for ticket %s (sid=%s, emergency=%s)",
            landlord.id, ticket_id, getattr(message, "sid", None), triage.emergency,
        )
        return True
