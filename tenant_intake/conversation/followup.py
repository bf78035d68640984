"""
Follow-up heuristic for short replies on an already-triaged ticket.

A tenant who answers "kitchen" or "under the sink" is adding detail to the
issue they already reported, so the flow acknowledges it without another
classification call or landlord alert. This is a keyword shortcut: it can
skip a needed re-triage or re-run an unneeded one.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from tenant_intake.config import settings
from tenant_intake.schemas.ticket_schema import Ticket

logger = logging.getLogger(__name__)

ROOM_FIXTURE_PATTERN = re.compile(
    r"\b(kitchen|bathroom|bath|bedroom|hallway|hall|ceiling"
    r"|under\s+(?:the\s+)?sink|under-sink|undersink)\b",
    re.IGNORECASE,
)


@dataclass
class FollowupResult:
    """Outcome of a follow-up check."""
    is_followup: bool
    matched_keyword: Optional[str] = None
    reason: Optional[str] = None


class FollowupHeuristic:
    """Decides whether an inbound text only adds detail to the open ticket."""

    def __init__(self, max_length: Optional[int] = None) -> None:
        self.max_length = max_length or settings.intake.followup_max_length

    def check(self, ticket: Ticket, body: str) -> FollowupResult:
        if not ticket.issue_type:
            return FollowupResult(is_followup=False, reason="ticket_not_triaged")
        if len(body) >= self.max_length:
            return FollowupResult(is_followup=False, reason="too_long")
        match = ROOM_FIXTURE_PATTERN.search(body)
        if match is None:
            return FollowupResult(is_followup=False, reason="no_keyword")
        keyword = match.group(0).lower()
        logger.info("Follow-up detail detected on ticket %s: '%s'", ticket.id, keyword)
        return FollowupResult(is_followup=True, matched_keyword=keyword)
