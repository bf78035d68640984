from tenant_intake.triage.classifier import (
    KeywordTriageClassifier,
    TriageClassifier,
    build_classifier,
    parse_triage_response,
)

__all__ = [
    "TriageClassifier", "KeywordTriageClassifier",
    "build_classifier", "parse_triage_response",
]
