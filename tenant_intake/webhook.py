"""
Inbound SMS webhook.

Twilio posts form-encoded ``From``/``Body`` fields and expects TwiML back
with HTTP 200 regardless of the business outcome, so every path here,
including unexpected failures, answers with a ``<Message>`` reply.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import Response
from twilio.twiml.messaging_response import MessagingResponse

from tenant_intake.agents.intake_agent import IntakeAgent
from tenant_intake.logging_context import set_request_id
from tenant_intake.prompts.reply_templates import ERROR_REPLY

logger = logging.getLogger(__name__)

router = APIRouter()


def twiml(message: str) -> str:
    """Render a single-message TwiML reply."""
    response = MessagingResponse()
    response.message(message)
    return str(response)


def twiml_response(message: str) -> Response:
    return Response(content=twiml(message), status_code=200, media_type="text/xml")


def get_agent(request: Request) -> IntakeAgent:
    return request.app.state.agent


@router.post("/sms")
async def sms_inbound(request: Request, agent: IntakeAgent = Depends(get_agent)):
    """Receive a tenant text and reply with TwiML."""
    try:
        form = await request.form()
        set_request_id(form.get("MessageSid") or None)
        from_number: Optional[str] = form.get("From")
        body: Optional[str] = form.get("Body")
        reply = await agent.handle_inbound(from_number, body)
    except Exception:
        logger.exception("Error in sms_inbound")
        reply = ERROR_REPLY
    return twiml_response(reply)


@router.get("/health")
async def health():
    return {"status": "ok"}


def create_app(agent: IntakeAgent) -> FastAPI:
    """Build the webhook app around a fully wired agent."""
    app = FastAPI(title="Tenant SMS Intake")
    app.state.agent = agent
    app.include_router(router)
    return app
