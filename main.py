"""
Tenant SMS intake entry point.

Serves the inbound SMS webhook, or runs the offline console demo for
development.

Usage:
    Webhook server: python main.py serve
    Console mode:   python main.py console
"""

import logging
import sys

from tenant_intake.config import settings

logger = logging.getLogger(__name__)


def _run_server() -> None:
    """Wire the intake agent and serve the webhook (requires credentials)."""
    import uvicorn

    from tenant_intake.agents.intake_agent import build_agent
    from tenant_intake.webhook import create_app

    app = create_app(build_agent())
    logger.info("Serving SMS webhook on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


def _run_console_mode() -> None:
    """Start the offline console demo (no API keys required)."""
    from console_demo import ConsoleSession

    session = ConsoleSession()
    session.run()


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "console":
        _run_console_mode()
    else:
        _run_server()
