from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pulse.core.models.enums import Familiarity, Hope, Role


class Submission(BaseModel):
    """The three answers of a survey form, checked against the closed sets."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    role: Role
    familiarity: Familiarity
    hope: tuple[Hope, ...] = Field(min_length=1)

    @field_validator("hope", mode="before")
    @classmethod
    def _normalize_hope(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = [value]
        if isinstance(value, (list, tuple)):
            # Keep selection order, drop repeats.
            return tuple(dict.fromkeys(str(entry).strip() for entry in value))
        return value

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> "Submission":
        return cls.model_validate(raw)
