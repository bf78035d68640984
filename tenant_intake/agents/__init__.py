from tenant_intake.agents.intake_agent import IntakeAgent, build_agent

__all__ = ["IntakeAgent", "build_agent"]
