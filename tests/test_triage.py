"""Tests for triage parsing and both classifier backends."""

import json
from types import SimpleNamespace

import pytest
from openai import OpenAIError

from tenant_intake.prompts.system_prompts import TRIAGE_SYSTEM_PROMPT
from tenant_intake.schemas.triage_schema import (
    PHOTO_REQUEST_QUESTION,
    IssueType,
    RiskLevel,
    TriageResult,
    default_triage,
)
from tenant_intake.triage.classifier import (
    KeywordTriageClassifier,
    TriageClassifier,
    parse_triage_response,
)


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class _FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.requests = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        return _completion(self.content)


def _fake_openai(content=None, error=None):
    completions = _FakeCompletions(content, error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


class TestParseTriageResponse:
    def test_well_formed_response(self):
        raw = json.dumps({
            "issueType": "plumbing",
            "emergency": True,
            "riskLevel": "high",
            "needsClarification": True,
            "clarificationQuestion": "Is water actively spreading?",
            "missingFields": {"location": True, "accessWindow": False,
                              "severity": False, "fixture": False},
        })
        result = parse_triage_response(raw)
        assert result.issue_type is IssueType.PLUMBING
        assert result.emergency is True
        assert result.risk_level is RiskLevel.HIGH
        assert result.needs_clarification is True
        assert result.clarification_question == "Is water actively spreading?"
        assert result.missing_fields.location is True
        assert result.asks_for_location is True

    def test_invalid_json_gives_safe_default(self):
        result = parse_triage_response("not json at all {")
        assert result.issue_type is IssueType.GENERAL
        assert result.emergency is False
        assert result.needs_clarification is False
        assert result.clarification_question is None

    def test_empty_and_none_give_safe_default(self):
        assert parse_triage_response("") == default_triage()
        assert parse_triage_response(None) == default_triage()

    def test_non_object_json_gives_safe_default(self):
        assert parse_triage_response("[1, 2, 3]") == default_triage()
        assert parse_triage_response('"plumbing"') == default_triage()

    def test_photo_variant_asks_for_photo(self):
        result = parse_triage_response("garbage", ask_for_photo=True)
        assert result.issue_type is IssueType.GENERAL
        assert result.needs_clarification is True
        assert result.clarification_question == PHOTO_REQUEST_QUESTION

    def test_each_bad_field_falls_back_alone(self):
        raw = json.dumps({
            "issueType": "roofing",
            "emergency": "yes",
            "riskLevel": "extreme",
            "needsClarification": 1,
            "clarificationQuestion": 42,
            "missingFields": "location",
        })
        result = parse_triage_response(raw)
        assert result.issue_type is IssueType.GENERAL
        assert result.emergency is False
        assert result.risk_level is RiskLevel.LOW
        assert result.needs_clarification is False
        assert result.clarification_question is None
        assert result.missing_fields.location is False

    def test_good_fields_survive_next_to_bad_ones(self):
        raw = json.dumps({"issueType": "HVAC", "emergency": True, "riskLevel": None})
        result = parse_triage_response(raw)
        assert result.issue_type is IssueType.HVAC
        assert result.emergency is True
        assert result.risk_level is RiskLevel.LOW

    def test_clarification_without_question_is_dropped(self):
        raw = json.dumps({"issueType": "plumbing", "needsClarification": True,
                          "clarificationQuestion": "   "})
        result = parse_triage_response(raw)
        assert result.needs_clarification is False
        assert result.clarification_question is None


class TestTriageClassifier:
    @pytest.mark.asyncio
    async def test_sends_prompt_and_schema(self):
        client, completions = _fake_openai(json.dumps({"issueType": "appliance"}))
        classifier = TriageClassifier(client, model="test-model", temperature=0.0)

        result = await classifier.classify("My fridge is warm")

        assert result.issue_type is IssueType.APPLIANCE
        request = completions.requests[0]
        assert request["model"] == "test-model"
        assert request["messages"][0] == {"role": "system", "content": TRIAGE_SYSTEM_PROMPT}
        assert request["messages"][1]["content"] == 'Tenant message: "My fridge is warm"'
        assert request["response_format"]["type"] == "json_schema"
        assert request["response_format"]["json_schema"]["strict"] is True

    @pytest.mark.asyncio
    async def test_missing_client_gives_default(self):
        classifier = TriageClassifier(None, ask_for_photo=False)
        assert await classifier.classify("Leak!") == default_triage()

    @pytest.mark.asyncio
    async def test_api_failure_gives_default(self):
        client, _ = _fake_openai(error=OpenAIError("rate limited"))
        classifier = TriageClassifier(client, ask_for_photo=False)
        assert await classifier.classify("Leak!") == default_triage()

    @pytest.mark.asyncio
    async def test_malformed_output_gives_default(self):
        client, _ = _fake_openai("Sure! Here is the JSON: {")
        classifier = TriageClassifier(client, ask_for_photo=False)
        result = await classifier.classify("Leak!")
        assert result == TriageResult()

    @pytest.mark.asyncio
    async def test_empty_choices_give_default(self):
        client, completions = _fake_openai()
        completions.create = _empty_choices
        classifier = TriageClassifier(client, ask_for_photo=False)
        assert await classifier.classify("Leak!") == default_triage()


async def _empty_choices(**kwargs):
    return SimpleNamespace(choices=[])


class TestKeywordTriageClassifier:
    def setup_method(self):
        self.classifier = KeywordTriageClassifier()

    @pytest.mark.asyncio
    async def test_flooding_is_plumbing_emergency(self):
        result = await self.classifier.classify("Water is flooding the bathroom!")
        assert result.issue_type is IssueType.PLUMBING
        assert result.emergency is True
        assert result.risk_level is RiskLevel.HIGH
        assert result.needs_clarification is False

    @pytest.mark.asyncio
    async def test_gas_smell_is_emergency(self):
        result = await self.classifier.classify("I smell gas near the furnace")
        assert result.emergency is True

    @pytest.mark.asyncio
    async def test_missing_location_asks_which_room(self):
        result = await self.classifier.classify("The toilet keeps running")
        assert result.issue_type is IssueType.PLUMBING
        assert result.needs_clarification is True
        assert result.asks_for_location is True

    @pytest.mark.asyncio
    async def test_known_location_needs_no_question(self):
        result = await self.classifier.classify("The fridge in the kitchen is warm")
        assert result.issue_type is IssueType.APPLIANCE
        assert result.needs_clarification is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", [
        "The fireplace mantel is loose",
        "My keyboard stopped working",
        "Someone left a stapler in the hall",
    ])
    async def test_keywords_inside_longer_words_do_not_match(self, text):
        result = await self.classifier.classify(text)
        assert result.issue_type is IssueType.GENERAL
        assert result.emergency is False

    @pytest.mark.asyncio
    async def test_plural_and_verb_endings_still_match(self):
        result = await self.classifier.classify("Two pipes dripping under the sink")
        assert result.issue_type is IssueType.PLUMBING

    @pytest.mark.asyncio
    async def test_plain_question(self):
        result = await self.classifier.classify("When is rent due?")
        assert result.issue_type is IssueType.QUESTION
        assert result.emergency is False
        assert result.needs_clarification is False
