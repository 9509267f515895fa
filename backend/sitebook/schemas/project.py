"""Project Schemas — field-level validation for project creation.

Invariants:
    - name: 1-200 chars, stripped, non-empty
    - budget/spent: finite, >= 0; numeric text is parsed, malformed text rejected
    - progress: integer 0-100
    - booleans are never numbers: true/false in a money or progress field is
      rejected instead of coerced to 1/0
    - end_date may be blank (stored as "")

Design Decisions:
    - camelCase aliases (startDate, endDate) match the persisted record shape;
      populate_by_name keeps snake_case usable from Python callers
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from sitebook.core.domain_types import ProjectStatus


class ProjectCreate(BaseModel):
    """Project creation — everything but the store-assigned id."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(min_length=1, max_length=200)
    budget: float = Field(ge=0, allow_inf_nan=False)
    spent: float = Field(0, ge=0, allow_inf_nan=False)
    progress: int = Field(0, ge=0, le=100)
    status: ProjectStatus = ProjectStatus.ACTIVE
    start_date: date
    end_date: date | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    @field_validator("end_date", mode="before")
    @classmethod
    def blank_end_date(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("budget", "spent", "progress", mode="before")
    @classmethod
    def reject_booleans(cls, v):
        if isinstance(v, bool):
            raise ValueError("expected a number, not a boolean")
        return v

    def to_record_fields(self) -> dict:
        return {
            "name": self.name,
            "budget": self.budget,
            "spent": self.spent,
            "progress": self.progress,
            "status": self.status.value,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat() if self.end_date else "",
        }
