"""
Triage classification of tenant messages.

``TriageClassifier`` asks an OpenAI chat model for a strict-JSON triage.
Whatever happens upstream (no key, network error, rate limit, malformed
JSON) the caller gets a ``TriageResult``; triage never aborts the flow.

``KeywordTriageClassifier`` has the same contract with no network access
and backs the offline console demo.
"""

import json
import logging
import re
from typing import Optional, Protocol

from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from tenant_intake.config import settings
from tenant_intake.prompts.system_prompts import (
    TRIAGE_RESPONSE_SCHEMA,
    TRIAGE_SYSTEM_PROMPT,
    build_triage_user_message,
)
from tenant_intake.schemas.triage_schema import IssueType, RiskLevel, TriageResult, default_triage

logger = logging.getLogger(__name__)


class Classifier(Protocol):
    async def classify(self, message_text: str) -> TriageResult:
        ...


def parse_triage_response(raw: Optional[str], ask_for_photo: bool = False) -> TriageResult:
    """Parse model output into a TriageResult, falling back field by field."""
    try:
        payload = json.loads(raw or "")
    except (TypeError, ValueError):
        logger.error("Failed to parse triage JSON: %r", raw)
        return default_triage(ask_for_photo)

    if not isinstance(payload, dict):
        logger.error("Triage JSON is not an object: %r", raw)
        return default_triage(ask_for_photo)

    try:
        return TriageResult.model_validate(payload)
    except ValidationError:
        logger.exception("Triage payload failed validation: %r", raw)
        return default_triage(ask_for_photo)


class TriageClassifier:
    """Language-model triage over the OpenAI chat completions API."""

    def __init__(
        self,
        client: Optional[AsyncOpenAI],
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        ask_for_photo: Optional[bool] = None,
    ) -> None:
        self._client = client
        self.model = model or settings.model.llm_model
        self.temperature = (
            settings.model.llm_temperature if temperature is None else temperature
        )
        self.ask_for_photo = (
            settings.model.fallback_asks_for_photo if ask_for_photo is None else ask_for_photo
        )

    async def classify(self, message_text: str) -> TriageResult:
        if self._client is None:
            logger.error("OpenAI API key missing; using default triage")
            return default_triage(self.ask_for_photo)

        try:
            completion = await self._client.chat.completions.create(
                model=self.model,
                temperature=self.temperature,
                messages=[
                    {"role": "system", "content": TRIAGE_SYSTEM_PROMPT},
                    {"role": "user", "content": build_triage_user_message(message_text)},
                ],
                response_format={"type": "json_schema", "json_schema": TRIAGE_RESPONSE_SCHEMA},
            )
        except OpenAIError:
            logger.exception("Triage call failed; using default triage")
            return default_triage(self.ask_for_photo)

        raw = completion.choices[0].message.content if completion.choices else None
        return parse_triage_response(raw, self.ask_for_photo)


def _keyword_pattern(keywords: list[str]) -> re.Pattern:
    """Whole-word match on any keyword, allowing a plain plural or verb ending."""
    alternatives = "|".join(re.escape(keyword) for keyword in keywords)
    return re.compile(rf"\b(?:{alternatives})(?:s|es|ed|ing)?\b", re.IGNORECASE)


class KeywordTriageClassifier:
    """Offline triage from keyword lists. Coarse, but needs no API key."""

    EMERGENCY_KEYWORDS = [
        "flooding", "flood", "burst pipe", "water everywhere", "overflowing",
        "no heat", "sparking", "sparks", "smoke", "burning smell", "fire",
        "gas leak", "smell gas", "carbon monoxide", "break-in", "broken into",
        "won't lock", "wont lock",
    ]

    ISSUE_KEYWORDS: dict[IssueType, list[str]] = {
        IssueType.PLUMBING: [
            "leak", "leaking", "drip", "pipe", "toilet", "sink", "drain",
            "faucet", "tap", "shower", "water", "clog", "flood",
        ],
        IssueType.HVAC: [
            "heat", "heater", "furnace", "boiler", "radiator", "air con",
            "ac", "a/c", "thermostat", "gas", "carbon monoxide",
        ],
        IssueType.ELECTRICAL: [
            "outlet", "breaker", "power", "light", "spark", "wiring", "electric",
        ],
        IssueType.APPLIANCE: [
            "fridge", "refrigerator", "oven", "stove", "dishwasher",
            "washer", "dryer", "microwave",
        ],
        IssueType.SECURITY: ["lock", "door", "window", "break-in", "broken into", "key"],
    }

    LOCATION_KEYWORDS = [
        "kitchen", "bathroom", "bedroom", "hallway", "hall", "living room",
        "ceiling", "sink", "basement", "balcony",
    ]

    LOCATION_QUESTION = "Which room is this in?"

    def __init__(self) -> None:
        self._emergency_pattern = _keyword_pattern(self.EMERGENCY_KEYWORDS)
        self._issue_patterns = [
            (candidate, _keyword_pattern(keywords))
            for candidate, keywords in self.ISSUE_KEYWORDS.items()
        ]
        self._location_pattern = _keyword_pattern(self.LOCATION_KEYWORDS)

    async def classify(self, message_text: str) -> TriageResult:
        issue_type = IssueType.GENERAL
        for candidate, pattern in self._issue_patterns:
            if pattern.search(message_text):
                issue_type = candidate
                break
        if issue_type is IssueType.GENERAL and message_text.rstrip().endswith("?"):
            issue_type = IssueType.QUESTION

        emergency = bool(self._emergency_pattern.search(message_text))
        if emergency:
            logger.info("Emergency keyword detected")

        has_location = bool(self._location_pattern.search(message_text))
        needs_location = (
            not emergency
            and issue_type not in (IssueType.GENERAL, IssueType.QUESTION)
            and not has_location
        )

        return TriageResult(
            issue_type=issue_type,
            emergency=emergency,
            risk_level=RiskLevel.HIGH if emergency else RiskLevel.LOW,
            needs_clarification=needs_location,
            clarification_question=self.LOCATION_QUESTION if needs_location else None,
            missing_fields={"location": not has_location},
        )


def build_classifier() -> Classifier:
    """Build the classifier selected by configuration."""
    if settings.model.triage_backend == "keyword":
        logger.info("Using keyword triage")
        return KeywordTriageClassifier()
    client = AsyncOpenAI(api_key=settings.model.api_key) if settings.model.api_key else None
    return TriageClassifier(client)
