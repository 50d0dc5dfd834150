"""Domain models for pulse."""

from pulse.core.models.enums import Familiarity, Hope, Role, SurveyField
from pulse.core.models.session import ResponseRecord, Session, SessionSummary
from pulse.core.models.submission import Submission

__all__ = [
    "Familiarity",
    "Hope",
    "ResponseRecord",
    "Role",
    "Session",
    "SessionSummary",
    "Submission",
    "SurveyField",
]
