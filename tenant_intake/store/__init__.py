from tenant_intake.store.document_store import (
    LANDLORDS,
    SERVER_TIMESTAMP,
    TENANTS,
    TICKET_MESSAGES,
    TICKETS,
    UNKNOWN_MESSAGES,
    DocumentStore,
    InMemoryDocumentStore,
    StoreError,
)

__all__ = [
    "DocumentStore", "InMemoryDocumentStore", "StoreError", "SERVER_TIMESTAMP",
    "TENANTS", "LANDLORDS", "TICKETS", "TICKET_MESSAGES", "UNKNOWN_MESSAGES",
]
