"""Tests for the short follow-up detail heuristic."""

import pytest

from tenant_intake.conversation.followup import FollowupHeuristic
from tenant_intake.schemas.ticket_schema import Ticket


def _ticket(issue_type=None) -> Ticket:
    return Ticket(id="T1", tenant_id="tenant-1", issue_type=issue_type)


class TestFollowupHeuristic:
    def setup_method(self):
        self.heuristic = FollowupHeuristic(max_length=40)

    def test_room_reply_on_triaged_ticket_fires(self):
        result = self.heuristic.check(_ticket("plumbing"), "kitchen")
        assert result.is_followup is True
        assert result.matched_keyword == "kitchen"

    @pytest.mark.parametrize("body", [
        "Bathroom", "the BEDROOM", "hallway ceiling", "it's under the sink",
        "under sink", "under-sink cabinet", "undersink", "main bath",
    ])
    def test_keyword_variants(self, body):
        assert self.heuristic.check(_ticket("plumbing"), body).is_followup is True

    def test_untriaged_ticket_never_fires(self):
        result = self.heuristic.check(_ticket(None), "kitchen")
        assert result.is_followup is False
        assert result.reason == "ticket_not_triaged"

    def test_long_message_is_not_a_followup(self):
        body = "The kitchen sink is now also leaking onto the floor badly"
        assert len(body) >= 40
        result = self.heuristic.check(_ticket("plumbing"), body)
        assert result.is_followup is False
        assert result.reason == "too_long"

    def test_length_threshold_is_exclusive(self):
        body = "kitchen".ljust(40, ".")
        assert self.heuristic.check(_ticket("plumbing"), body).is_followup is False
        assert self.heuristic.check(_ticket("plumbing"), body[:39]).is_followup is True

    def test_short_message_without_keyword(self):
        result = self.heuristic.check(_ticket("plumbing"), "ok thanks")
        assert result.is_followup is False
        assert result.reason == "no_keyword"

    def test_keyword_must_be_whole_word(self):
        assert self.heuristic.check(_ticket("hvac"), "kitchenette?").is_followup is False
        assert self.heuristic.check(_ticket("hvac"), "shall we").is_followup is False

    def test_default_threshold_comes_from_settings(self):
        assert FollowupHeuristic().max_length == 40
