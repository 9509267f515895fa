"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ProjectId and InvoiceId are independent integer sequences
    - All valid states encoded as Enums — no raw string matching
    - Enum values are the exact strings persisted and returned over HTTP

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ProjectId = NewType("ProjectId", int)
InvoiceId = NewType("InvoiceId", int)


# ─── Enums ───────────────────────────────────────────────────────

class ProjectStatus(str, Enum):
    """Project lifecycle states — set by the caller, never transitioned here."""
    ACTIVE = "Active"
    COMPLETED = "Completed"
    ON_HOLD = "On Hold"


class InvoiceStatus(str, Enum):
    """Invoice payment states — caller-owned, default PENDING on creation."""
    PAID = "Paid"
    PENDING = "Pending"
    OVERDUE = "Overdue"


class RiskLevel(str, Enum):
    """Risk classification derived from spend-vs-progress deviation."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class UserRole(str, Enum):
    """Session roles. Every login currently yields ADMIN."""
    ADMIN = "Admin"
    MANAGER = "Manager"


class StorageKey(str, Enum):
    """Keys of the three independent persisted records."""
    PROJECTS = "projects"
    INVOICES = "invoices"
    SESSION = "session"


# Levels that count towards DashboardStats.critical_risks
ELEVATED_RISK_LEVELS = frozenset({RiskLevel.HIGH, RiskLevel.CRITICAL})
