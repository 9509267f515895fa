"""Entity Records — immutable snapshots of projects, invoices and the session.

Invariants:
    - Records are frozen: mutation produces a new snapshot (dataclasses.replace)
    - to_dict()/from_dict() use the persisted camelCase field names
    - from_dict() raises KeyError/TypeError/ValueError on malformed payloads;
      the store maps those to CorruptRecordError
    - progress is a whole number from 0 to 100 at every entry point, not only
      the input schemas
    - next_record_id() = max existing id + 1, or 1 for an empty collection

Design Decisions:
    - Plain dataclasses over ORM rows: the store persists whole collections as
      JSON, and the engines must stay free of DB types
    - Derived values (RiskAnalysis, DashboardStats) live here too so the core
      has a single vocabulary
"""

from dataclasses import dataclass, replace, field
from typing import Iterable

from sitebook.core.domain_types import (
    ProjectId, InvoiceId, ProjectStatus, InvoiceStatus, RiskLevel, UserRole,
)


@dataclass(frozen=True)
class Project:
    id: ProjectId
    name: str
    budget: float
    spent: float
    progress: int
    status: ProjectStatus
    start_date: str
    end_date: str = ""

    def with_added_spend(self, amount: float) -> "Project":
        return replace(self, spent=self.spent + amount)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "budget": self.budget,
            "spent": self.spent,
            "progress": self.progress,
            "status": self.status.value,
            "startDate": self.start_date,
            "endDate": self.end_date,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Project":
        return cls(
            id=ProjectId(int(data["id"])),
            name=str(data["name"]),
            budget=_money(data["budget"]),
            spent=_money(data["spent"]),
            progress=_progress(data["progress"]),
            status=ProjectStatus(data["status"]),
            start_date=data.get("startDate") or "",
            end_date=data.get("endDate") or "",
        )


@dataclass(frozen=True)
class Invoice:
    id: InvoiceId
    project_id: ProjectId
    amount: float
    description: str
    date: str
    status: InvoiceStatus = InvoiceStatus.PENDING

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "projectId": self.project_id,
            "amount": self.amount,
            "description": self.description,
            "date": self.date,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Invoice":
        return cls(
            id=InvoiceId(int(data["id"])),
            project_id=ProjectId(int(data["projectId"])),
            amount=_money(data["amount"]),
            description=str(data.get("description", "")),
            date=str(data["date"]),
            status=InvoiceStatus(data.get("status", InvoiceStatus.PENDING.value)),
        )


@dataclass(frozen=True)
class UserSession:
    """The single signed-in identity. Trusted, never verified."""
    id: str
    username: str
    role: UserRole
    token: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "role": self.role.value,
            "token": self.token,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserSession":
        return cls(
            id=str(data["id"]),
            username=str(data["username"]),
            role=UserRole(data["role"]),
            token=str(data["token"]),
        )


@dataclass(frozen=True)
class RiskAnalysis:
    project_id: ProjectId
    risk_score: int
    risk_level: RiskLevel
    reason: str

    def to_dict(self) -> dict:
        return {
            "projectId": self.project_id,
            "riskScore": self.risk_score,
            "riskLevel": self.risk_level.value,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class DashboardStats:
    total_revenue: float = 0
    active_projects: int = 0
    total_budget: float = 0
    total_spent: float = 0
    critical_risks: int = 0

    def to_dict(self) -> dict:
        return {
            "totalRevenue": self.total_revenue,
            "activeProjects": self.active_projects,
            "totalBudget": self.total_budget,
            "totalSpent": self.total_spent,
            "criticalRisks": self.critical_risks,
        }


@dataclass(frozen=True)
class InvoiceRecordResult:
    """Outcome of recording an invoice. warning is set when no project matched."""
    invoice: Invoice
    project_updated: bool
    warning: str | None = None
    project: Project | None = field(default=None, compare=False)


def _money(value) -> float:
    """Persisted money must be a JSON number; text or booleans mean corruption."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {type(value).__name__}")
    return value


def _progress(value) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {type(value).__name__}")
    if not 0 <= value <= 100 or value != int(value):
        raise ValueError(f"progress must be a whole number from 0 to 100, got {value}")
    return int(value)


def next_record_id(ids: Iterable[int]) -> int:
    """Max existing id + 1; 1 when the collection is empty. Ids are never reused."""
    return max(ids, default=0) + 1
