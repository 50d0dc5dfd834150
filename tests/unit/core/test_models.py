from __future__ import annotations

from datetime import UTC, datetime

from pulse.core.models.enums import Familiarity, Hope, Role, SurveyField
from pulse.core.models.session import (
    ResponseRecord,
    Session,
    decode_pointer,
    decode_sessions,
    encode_pointer,
    encode_sessions,
)

START = datetime(2024, 10, 19, 14, 30, tzinfo=UTC)


def test_session_encodes_camel_case_fields():
    record = ResponseRecord(
        id="r1",
        session_id="s1",
        role=Role.PRODUCT_MANAGER,
        familiarity=Familiarity.EXPERT,
        hope=(Hope.CAREER_GROWTH,),
        timestamp=START,
    )
    session = Session(id="s1", start_time=START, responses=[record], archived=True, archived_at=START)
    payload = encode_sessions({"s1": session})
    for key in (b'"startTime"', b'"archivedAt"', b'"lastUpdated"', b'"sessionId"'):
        assert key in payload
    decoded = decode_sessions(payload)["s1"]
    assert decoded.responses[0].role is Role.PRODUCT_MANAGER
    assert decoded.archived_at == START


def test_pointer_encoding():
    assert encode_pointer("s1") == b'"s1"'
    assert decode_pointer(b'"s1"') == "s1"
    assert decode_pointer(b"null") is None


def test_enum_labels():
    assert Role.PRODUCT_MANAGER.label == "Product Manager"
    assert Role.ENGINEER.label == "Engineer"
    assert Familiarity.NONE.label == "No experience"
    assert Hope.TOOLS_OVERVIEW.label == "Tools Overview"


def test_survey_field_headings():
    assert SurveyField.ROLE.heading == "Primary Role"
    assert SurveyField.FAMILIARITY.heading == "AI Familiarity"
    assert SurveyField.HOPE.heading == "Expected Takeaways"
    assert [field.is_multi for field in SurveyField] == [False, False, True]
