"""Seed Data — first-run contents of the project and invoice collections.

Invariants:
    - Exactly 3 projects and 3 invoices; invoices reference seeded project ids
    - Seeded spent values are a baseline: seeded invoices are NOT applied to them
    - Returned as fresh dicts on every call so callers can't mutate shared state
"""


def default_projects() -> list[dict]:
    return [
        {
            "id": 1, "name": "Skyline Apartments", "budget": 500000,
            "spent": 120000, "progress": 25, "status": "Active",
            "startDate": "2023-01-15", "endDate": "2024-06-30",
        },
        {
            "id": 2, "name": "Downtown Plaza Reno", "budget": 150000,
            "spent": 140000, "progress": 60, "status": "Active",
            "startDate": "2023-05-01", "endDate": "2023-12-01",
        },
        {
            "id": 3, "name": "Westside Bridge", "budget": 1200000,
            "spent": 400000, "progress": 30, "status": "Active",
            "startDate": "2022-11-20", "endDate": "2025-01-15",
        },
    ]


def default_invoices() -> list[dict]:
    return [
        {
            "id": 1, "projectId": 1, "amount": 50000,
            "description": "Initial Material Order", "date": "2023-02-10",
            "status": "Paid",
        },
        {
            "id": 2, "projectId": 2, "amount": 75000,
            "description": "Subcontractor Phase 1", "date": "2023-06-15",
            "status": "Paid",
        },
        {
            "id": 3, "projectId": 1, "amount": 25000,
            "description": "Plumbing Rough-in", "date": "2023-08-20",
            "status": "Pending",
        },
    ]
