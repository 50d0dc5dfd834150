from __future__ import annotations

from collections.abc import Mapping

import fastjsonschema  # type: ignore[import-untyped]
from fastjsonschema import JsonSchemaException
from pydantic import ValidationError

from pulse.core.errors import EmptySelection, InvalidSubmission, ValidationIssue
from pulse.core.models.enums import Familiarity, Hope, Role
from pulse.core.models.submission import Submission

__all__ = ["SUBMISSION_SCHEMA", "ValidationIssue", "validate_payload", "validate_submission"]

SUBMISSION_SCHEMA: dict[str, object] = {
    "type": "object",
    "required": ["role", "familiarity", "hope"],
    "additionalProperties": False,
    "properties": {
        "role": {"type": "string", "enum": [member.value for member in Role]},
        "familiarity": {"type": "string", "enum": [member.value for member in Familiarity]},
        "hope": {
            "type": "array",
            "minItems": 1,
            "items": {"type": "string", "enum": [member.value for member in Hope]},
        },
    },
}

_validator = fastjsonschema.compile(SUBMISSION_SCHEMA)


def validate_payload(payload: Mapping[str, object]) -> list[ValidationIssue]:
    try:
        _validator(dict(payload))
    except JsonSchemaException as exc:
        path = ".".join(str(part) for part in exc.path[1:]) if exc.path else ""
        return [ValidationIssue(path=path, message=exc.message)]
    return []


def _selected_hopes(raw: object) -> list[object]:
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, (list, tuple, set, frozenset)):
        # Not a selection at all; leave it for the schema to report.
        return [raw]
    selected: list[object] = []
    for entry in raw:
        if isinstance(entry, str):
            entry = entry.strip()
            if not entry:
                continue
        selected.append(entry)
    return selected


def validate_submission(raw: object) -> Submission:
    """Validate a raw form submission.

    Raises:
        EmptySelection: No ``hope`` value was selected.
        InvalidSubmission: The payload is malformed or uses an unknown value.
    """
    if not isinstance(raw, Mapping):
        raise InvalidSubmission([ValidationIssue(path="", message="Submission must be a mapping.")])
    hopes = _selected_hopes(raw.get("hope"))
    if not hopes:
        raise EmptySelection()
    payload = {**raw, "hope": hopes}
    issues = validate_payload(payload)
    if issues:
        raise InvalidSubmission(issues)
    try:
        return Submission.from_raw(payload)
    except ValidationError as exc:
        raise InvalidSubmission(
            [
                ValidationIssue(
                    path=".".join(str(part) for part in error.get("loc", ())),
                    message=error.get("msg", ""),
                )
                for error in exc.errors()
            ]
        ) from exc
