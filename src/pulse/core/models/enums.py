from __future__ import annotations

from enum import StrEnum


class _LabeledEnum(StrEnum):
    @property
    def label(self) -> str:
        return _LABELS.get(self.value, self.value.replace("-", " ").title())


class Role(_LabeledEnum):
    ENGINEER = "engineer"
    DESIGNER = "designer"
    PRODUCT_MANAGER = "product-manager"
    DATA_SCIENTIST = "data-scientist"
    RESEARCHER = "researcher"
    STUDENT = "student"
    LEADERSHIP = "leadership"
    OTHER = "other"


class Familiarity(_LabeledEnum):
    NONE = "none"
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class Hope(_LabeledEnum):
    PRACTICAL_SKILLS = "practical-skills"
    NETWORKING = "networking"
    INSPIRATION = "inspiration"
    TOOLS_OVERVIEW = "tools-overview"
    BEST_PRACTICES = "best-practices"
    CAREER_GROWTH = "career-growth"
    USE_CASES = "use-cases"


class SurveyField(StrEnum):
    ROLE = "role"
    FAMILIARITY = "familiarity"
    HOPE = "hope"

    @property
    def is_multi(self) -> bool:
        return self is SurveyField.HOPE

    @property
    def heading(self) -> str:
        return _FIELD_HEADINGS[self]


_LABELS = {
    "product-manager": "Product Manager",
    "data-scientist": "Data Scientist",
    "none": "No experience",
    "tools-overview": "Tools Overview",
    "use-cases": "Use Cases",
}

_FIELD_HEADINGS = {
    SurveyField.ROLE: "Primary Role",
    SurveyField.FAMILIARITY: "AI Familiarity",
    SurveyField.HOPE: "Expected Takeaways",
}
