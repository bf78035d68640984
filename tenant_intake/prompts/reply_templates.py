"""Tenant-facing replies and the landlord alert text."""

from typing import Optional

from tenant_intake.config import settings
from tenant_intake.schemas.triage_schema import IssueType, TriageResult

EMPTY_MESSAGE_REPLY = "We received an empty message. Please try again."
UNKNOWN_SENDER_REPLY = (
    "Thanks for your message. Please reply with your full name and unit "
    "address so we can help."
)
ERROR_REPLY = "We ran into an error on our side, but we received your message."

EMERGENCY_TAG = "[EMERGENCY]"

# Keyed by issue type; anything else gets only the closing reminder.
SAFETY_GUIDANCE: dict[str, str] = {
    IssueType.PLUMBING.value: (
        "If water is spreading, turn off the water supply to the fixture or unit if you can do so safely."
    ),
    IssueType.ELECTRICAL.value: (
        "Stay clear of sparking or smoking outlets and switch off power at the breaker if it is safe."
    ),
    IssueType.HVAC.value: (
        "If you smell gas, leave the unit right away and don't use any switches."
    ),
    IssueType.SECURITY.value: (
        "If you feel unsafe, go somewhere secure and stay there."
    ),
}


def _greeting(name: str) -> str:
    return f"Thanks {name}," if name else "Thanks,"


def issue_label(issue_type: Optional[str]) -> str:
    """Human label for the ticket: "issue" stands in for general or unknown."""
    if not issue_type or issue_type == IssueType.GENERAL.value:
        return "issue"
    return issue_type


def safety_reminder(issue_type: Optional[str]) -> str:
    emergency_number = settings.intake.emergency_number
    closing = f"If anyone is in danger, call {emergency_number} immediately."
    guidance = SAFETY_GUIDANCE.get(issue_type or "")
    return f"{guidance} {closing}" if guidance else closing


def compose_reply(name: str, triage: TriageResult) -> str:
    """Build the acknowledgment for a freshly triaged message.

    Clarification wins over emergency, which wins over the plain acknowledgment.
    """
    label = issue_label(triage.issue_type.value)
    greeting = _greeting(name)

    if triage.needs_clarification and triage.clarification_question:
        return f"{greeting} I've logged this as a {label}. {triage.clarification_question}"

    if triage.emergency:
        return (
            f"{greeting} I've marked this {label} as urgent and alerted your landlord. "
            f"{safety_reminder(triage.issue_type.value)}"
        )

    return (
        f"{greeting} I've logged this as a {label}. "
        "I'll coordinate with your landlord and follow up shortly."
    )


def compose_followup_reply(name: str, issue_type: str) -> str:
    return (
        f"{_greeting(name)} I've added that detail to your {issue_type} ticket. "
        "I'll pass it along to your landlord."
    )


def truncate_message(body: str, max_length: Optional[int] = None) -> str:
    limit = max_length or settings.intake.landlord_summary_max_length
    if len(body) <= limit:
        return body
    return body[: limit - 3] + "..."


def build_landlord_summary(
    tenant_name: str,
    unit_id: Optional[str],
    ticket_id: str,
    triage: TriageResult,
    body: str,
) -> str:
    """SMS text sent to the landlord for a newly triaged message."""
    prefix = f"{EMERGENCY_TAG} " if triage.emergency else ""
    lines = [
        f"{prefix}New issue from {tenant_name or 'tenant'} (Unit {unit_id or '?'})",
        f"Ticket: {ticket_id}",
        f"Type: {triage.issue_type.value}",
        f"Emergency: {'YES' if triage.emergency else 'No'}",
        f'Message: "{truncate_message(body)}"',
    ]
    return "\n".join(lines)
