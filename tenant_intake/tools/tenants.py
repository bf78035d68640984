"""
Tenant and landlord lookups.

Tenant records are owned by an external system; this module only reads
them, plus the append-only log of texts from numbers we don't recognise.
"""

import logging
from typing import Optional

from tenant_intake.schemas.tenant_schema import Landlord, Tenant
from tenant_intake.store.document_store import (
    LANDLORDS,
    SERVER_TIMESTAMP,
    TENANTS,
    UNKNOWN_MESSAGES,
    DocumentStore,
)

logger = logging.getLogger(__name__)


async def find_tenant_by_phone(store: DocumentStore, phone: str) -> Optional[Tenant]:
    """Look up a tenant whose phone exactly equals the sender. Returns None if not found."""
    phone = phone.strip()
    if not phone:
        raise ValueError("phone must not be empty")
    docs = await store.query(TENANTS, "phone", phone, limit=1)
    if not docs:
        logger.debug("No tenant for %s", phone)
        return None
    tenant = Tenant.model_validate(docs[0])
    logger.debug("Tenant found: %s", tenant.id)
    return tenant


async def get_landlord_by_id(store: DocumentStore, landlord_id: str) -> Optional[Landlord]:
    doc = await store.get(LANDLORDS, landlord_id)
    return Landlord.model_validate(doc) if doc else None


async def log_unknown_message(store: DocumentStore, from_number: str, body: str) -> str:
    """Record a text from an unmatched sender so staff can follow up."""
    doc_id = await store.add(
        UNKNOWN_MESSAGES,
        {"from": from_number, "body": body, "createdAt": SERVER_TIMESTAMP},
    )
    logger.info("Unknown sender logged as %s", doc_id)
    return doc_id
