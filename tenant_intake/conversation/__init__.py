from tenant_intake.conversation.followup import FollowupHeuristic, FollowupResult

__all__ = ["FollowupHeuristic", "FollowupResult"]
