"""
Offline console demo: texts the intake flow from the terminal.

Runs the real intake agent against an in-memory store seeded with one
tenant and landlord, keyword triage, and a console SMS transport that
prints landlord alerts. No API keys, no network calls.

Usage:
    python console_demo.py
    python console_demo.py --scenario leak
    python console_demo.py --scenario followup
    python console_demo.py --scenario unknown
"""

import argparse
import asyncio
import itertools
from dataclasses import dataclass

from tenant_intake.agents.intake_agent import IntakeAgent
from tenant_intake.notify.landlord import LandlordNotifier
from tenant_intake.store.document_store import (
    LANDLORDS,
    TENANTS,
    TICKETS,
    InMemoryDocumentStore,
)
from tenant_intake.triage.classifier import KeywordTriageClassifier

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

DEMO_TENANT_PHONE = "+15551230001"
DEMO_LANDLORD_PHONE = "+15559870001"
DEMO_FROM_NUMBER = "+15550000000"
UNKNOWN_PHONE = "+15554440000"


@dataclass
class _SentMessage:
    sid: str


class _ConsoleMessages:
    """Prints outbound SMS instead of sending them."""

    def __init__(self) -> None:
        self._ids = itertools.count(1)

    def create(self, from_: str, to: str, body: str) -> _SentMessage:
        print(f"{YELLOW}{BOLD}[SMS to landlord {to}]{RESET}")
        for line in body.splitlines():
            print(f"{YELLOW}  {line}{RESET}")
        return _SentMessage(sid=f"SM-DEMO-{next(self._ids):04d}")


class _ConsoleSmsClient:
    def __init__(self) -> None:
        self.messages = _ConsoleMessages()


def _seed(store: InMemoryDocumentStore) -> None:
    store.seed(LANDLORDS, "landlord-demo", {"phone": DEMO_LANDLORD_PHONE, "name": "Pat Owner"})
    store.seed(TENANTS, "tenant-demo", {
        "phone": DEMO_TENANT_PHONE,
        "firstName": "Alex",
        "landlordId": "landlord-demo",
        "unitId": "4B",
    })


class ConsoleSession:
    """Simulates an SMS conversation with the intake agent in the terminal."""

    SCENARIOS: dict[str, list[tuple[str, str]]] = {
        "leak": [
            (DEMO_TENANT_PHONE, "Water is flooding from the pipe, it's everywhere!"),
            (DEMO_TENANT_PHONE, "It's getting worse, the floor is soaked"),
        ],
        "followup": [
            (DEMO_TENANT_PHONE, "My sink is leaking"),
            (DEMO_TENANT_PHONE, "kitchen"),
        ],
        "unknown": [
            (UNKNOWN_PHONE, "Hi, my heater is broken"),
        ],
    }

    MAX_INPUT_LENGTH = 500

    def __init__(self) -> None:
        self.store = InMemoryDocumentStore()
        _seed(self.store)
        notifier = LandlordNotifier(self.store, _ConsoleSmsClient(), DEMO_FROM_NUMBER)
        self.agent = IntakeAgent(self.store, KeywordTriageClassifier(), notifier)

    def agent_say(self, text: str) -> None:
        print(f"{GREEN}{BOLD}[Intake]{RESET} {GREEN}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def _banner(self, title: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  TENANT SMS INTAKE - {title}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        print()

    def _send(self, phone: str, text: str) -> None:
        print(f"\n{BLUE}[{phone}] {RESET}{text}")
        reply = asyncio.run(self.agent.handle_inbound(phone, text))
        self.agent_say(reply)
        self._log_ticket_state()

    def _log_ticket_state(self) -> None:
        tickets = self.store.all(TICKETS)
        if not tickets:
            self.system_log("No tickets")
            return
        ticket = tickets[-1]
        self.system_log(
            f"Ticket {ticket['id']}: status={ticket['status']} "
            f"type={ticket.get('issueType')} emergency={ticket.get('emergencyFlag')} "
            f"pending={ticket.get('pendingClarificationField')}"
        )

    def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario for demo purposes."""
        steps = self.SCENARIOS.get(scenario)
        if not steps:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return

        self._banner(f"Scenario: {scenario}")
        for phone, text in steps:
            self._send(phone, text)
        print(f"\n{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  Scenario '{scenario}' complete.{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

    def run(self) -> None:
        self._banner("Interactive")
        print(f"{DIM}  Texting as tenant {DEMO_TENANT_PHONE}. Type 'quit' to exit.{RESET}")
        while True:
            try:
                text = input(f"\n{BLUE}You: {RESET}").strip()
            except (EOFError, KeyboardInterrupt):
                print()
                break
            if text.lower() in ("quit", "exit"):
                break
            if len(text) > self.MAX_INPUT_LENGTH:
                print(f"{RED}Message too long ({len(text)} chars).{RESET}")
                continue
            self._send(DEMO_TENANT_PHONE, text)


def main() -> None:
    parser = argparse.ArgumentParser(description="Tenant SMS intake console demo")
    parser.add_argument(
        "--scenario",
        choices=sorted(ConsoleSession.SCENARIOS),
        help="Play a scripted conversation instead of interactive mode",
    )
    args = parser.parse_args()

    session = ConsoleSession()
    if args.scenario:
        session.run_scenario(args.scenario)
    else:
        session.run()


if __name__ == "__main__":
    main()
