"""Frequency counts and percentages over a response collection.

Percentages are "share of respondents": the denominator is always the
number of responses, so for the multi-select ``hope`` field they can add
up to more than 100.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence

import attrs

from pulse.core.models.enums import Familiarity, Hope, Role, SurveyField
from pulse.core.models.session import ResponseRecord

_ENUMS: dict[SurveyField, type[Role] | type[Familiarity] | type[Hope]] = {
    SurveyField.ROLE: Role,
    SurveyField.FAMILIARITY: Familiarity,
    SurveyField.HOPE: Hope,
}


@attrs.frozen(slots=True)
class Bucket:
    value: str
    label: str
    count: int
    percentage: float


@attrs.frozen(slots=True)
class FieldSummary:
    field: SurveyField
    total: int
    buckets: tuple[Bucket, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.total == 0


def field_values(record: ResponseRecord, field: SurveyField) -> tuple[str, ...]:
    """Values a record contributes to ``field``: one for scalars, all selections for hope."""
    match field:
        case SurveyField.ROLE:
            return (record.role.value,)
        case SurveyField.FAMILIARITY:
            return (record.familiarity.value,)
        case SurveyField.HOPE:
            return tuple(hope.value for hope in record.hope)


def count_by(responses: Iterable[ResponseRecord], field: SurveyField | str) -> dict[str, int]:
    field = SurveyField(field)
    counts: Counter[str] = Counter()
    for record in responses:
        counts.update(field_values(record, field))
    return dict(counts)


def percentage(count: int, total: int) -> float:
    if total <= 0:
        raise ValueError("Total must be positive.")
    return round(count / total * 100, 1)


def _label(field: SurveyField, value: str) -> str:
    try:
        return _ENUMS[field](value).label
    except ValueError:
        return value


def summarize(responses: Sequence[ResponseRecord], field: SurveyField | str) -> FieldSummary:
    field = SurveyField(field)
    total = len(responses)
    if total == 0:
        return FieldSummary(field=field, total=0)
    counts = count_by(responses, field)
    # sorted() is stable, so ties keep first-seen order.
    ordered = sorted(counts.items(), key=lambda entry: entry[1], reverse=True)
    buckets = tuple(
        Bucket(
            value=value,
            label=_label(field, value),
            count=count,
            percentage=percentage(count, total),
        )
        for value, count in ordered
    )
    return FieldSummary(field=field, total=total, buckets=buckets)


def summarize_all(responses: Sequence[ResponseRecord]) -> dict[SurveyField, FieldSummary]:
    return {field: summarize(responses, field) for field in SurveyField}
