"""
Triage instructions and response schema for the language model.

The classification rules live here, in the prompt text. The code only
checks that the answer fits the declared schema.
"""

from tenant_intake.config import settings

_intake = settings.intake

COMPANY_CONTEXT = f"""
You are the maintenance intake assistant for {_intake.company_name}.
Tenants text you about problems in their rental unit. Your job is to TRIAGE
each message, not to chat.
"""

CLASSIFICATION_RULES = """
CLASSIFY issueType as exactly one of:
  plumbing, hvac, electrical, appliance, security, general, question, other.

Set emergency = true ONLY when there is clear risk of:
- active water damage: leak that is spreading, flooding, overflowing toilet, burst pipe
- no heat when it is cold outside
- electrical fire risk: burning smell, sparks, smoke from outlets or panels
- gas smell or a carbon monoxide alarm
- a security breach: break-in, a door or window that will not lock
Otherwise emergency = false.

Set riskLevel to low, medium, or high. Emergencies are high. Problems that
will get worse within a day are medium. Everything else is low.
"""

CLARIFICATION_RULES = """
Fill missingFields with true for each detail the tenant has NOT given:
- location: which room or area of the unit
- accessWindow: when someone can enter the unit
- severity: how bad it is right now
- fixture: which fixture or appliance is affected

Ask AT MOST ONE clarifying question, and only if it changes what happens next.
- NEVER ask "is this an emergency?". Ask an operational question instead, like
  "Is water actively spreading or just dripping slowly?"
- NEVER ask about access windows until location, severity, and fixture are known.
- Do NOT ask anything for very short or clearly non-urgent messages
  (for example "thanks" or "ok").
If no question is needed, set needsClarification=false and clarificationQuestion=null.
"""

TRIAGE_SYSTEM_PROMPT = f"""{COMPANY_CONTEXT}
{CLASSIFICATION_RULES}
{CLARIFICATION_RULES}
Respond ONLY with JSON matching the provided schema."""


def build_triage_user_message(message_text: str) -> str:
    return f'Tenant message: "{message_text}"'


TRIAGE_RESPONSE_SCHEMA: dict = {
    "name": "tenant_triage",
    "strict": True,
    "schema": {
        "type": "object",
        "additionalProperties": False,
        "required": [
            "issueType", "emergency", "riskLevel",
            "needsClarification", "clarificationQuestion", "missingFields",
        ],
        "properties": {
            "issueType": {
                "type": "string",
                "enum": [
                    "plumbing", "hvac", "electrical", "appliance",
                    "security", "general", "question", "other",
                ],
            },
            "emergency": {"type": "boolean"},
            "riskLevel": {"type": "string", "enum": ["low", "medium", "high"]},
            "needsClarification": {"type": "boolean"},
            "clarificationQuestion": {"type": ["string", "null"]},
            "missingFields": {
                "type": "object",
                "additionalProperties": False,
                "required": ["location", "accessWindow", "severity", "fixture"],
                "properties": {
                    "location": {"type": "boolean"},
                    "accessWindow": {"type": "boolean"},
                    "severity": {"type": "boolean"},
                    "fixture": {"type": "boolean"},
                },
            },
        },
    },
}
