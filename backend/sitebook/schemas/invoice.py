"""Invoice Schemas — field-level validation for invoice recording.

Invariants:
    - amount: finite and strictly positive; booleans are rejected, numeric text parsed
    - project_id: positive integer; existence is NOT checked here
    - date defaults to today; status defaults to Pending
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from sitebook.core.domain_types import InvoiceStatus


class InvoiceCreate(BaseModel):
    """Invoice creation — everything but the store-assigned id."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    project_id: int = Field(gt=0)
    amount: float = Field(gt=0, allow_inf_nan=False)
    description: str = Field("", max_length=500)
    date: dt.date = Field(default_factory=dt.date.today)
    status: InvoiceStatus = InvoiceStatus.PENDING

    @field_validator("project_id", "amount", mode="before")
    @classmethod
    def reject_booleans(cls, v):
        if isinstance(v, bool):
            raise ValueError("expected a number, not a boolean")
        return v

    def to_record_fields(self) -> dict:
        return {
            "projectId": self.project_id,
            "amount": self.amount,
            "description": self.description.strip(),
            "date": self.date.isoformat(),
            "status": self.status.value,
        }
