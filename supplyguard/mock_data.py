"""Seed data for a fresh dashboard session."""

from __future__ import annotations

from typing import Any

MOCK_SUPPLIERS: list[dict[str, Any]] = [
    {
        "id": "s1",
        "name": "Acme Textiles Ltd",
        "legal_name": "Acme Textile Manufacturing Bangladesh Ltd",
        "country": "BD",
        "industry": "Textiles",
        "risk_score": 78,
        "sanctions_hit": False,
        "status": "WATCHLIST",
        "last_screened_at": "2024-12-26T10:00:00Z",
        "news": [
            {
                "id": "n1",
                "title": "Labor violations reported in Dhaka textile hub",
                "url": "#",
                "source": "Reuters",
                "published_at": "2024-12-25T08:30:00Z",
                "summary": (
                    "Multiple workers reported unpaid overtime and unsafe working "
                    "conditions at the Dhaka facility."
                ),
                "is_relevant": True,
                "severity": 9,
                "risks": ["Labor Violations", "Human Rights"],
            },
        ],
    },
    {
        "id": "s2",
        "name": "TechParts Shenzhen",
        "country": "CN",
        "industry": "Electronics",
        "risk_score": 55,
        "sanctions_hit": False,
        "status": "ACTIVE",
        "last_screened_at": "2024-12-27T12:00:00Z",
        "news": [],
    },
    {
        "id": "s3",
        "name": "Global LogiCorp",
        "country": "MM",
        "industry": "Logistics",
        "risk_score": 92,
        "sanctions_hit": True,
        "status": "BLOCKED",
        "last_screened_at": "2024-12-27T09:00:00Z",
        "news": [
            {
                "id": "n2",
                "title": "New sanctions list includes Myanmar logistics firms",
                "url": "#",
                "source": "EU Commission",
                "published_at": "2024-12-20T14:00:00Z",
                "summary": (
                    "Strategic logistics entities linked to the military regime have "
                    "been added to the consolidated sanctions list."
                ),
                "is_relevant": True,
                "severity": 10,
                "risks": ["Sanctions", "Political Risk"],
            },
        ],
    },
]

MOCK_ALERTS: list[dict[str, Any]] = [
    {
        "id": "a1",
        "supplier_id": "s1",
        "supplier_name": "Acme Textiles Ltd",
        "type": "HIGH_RISK_NEWS",
        "severity": 9,
        "title": "Critical Risk: Labor Violations",
        "message": "Reported unpaid overtime and safety hazards in Dhaka factory.",
        "status": "UNREAD",
        "created_at": "2024-12-25T09:00:00Z",
    },
    {
        "id": "a2",
        "supplier_id": "s3",
        "supplier_name": "Global LogiCorp",
        "type": "SANCTIONS",
        "severity": 10,
        "title": "Sanctions Hit Detected",
        "message": "Supplier matched with EU Consolidated Sanctions List update.",
        "status": "UNREAD",
        "created_at": "2024-12-27T09:05:00Z",
    },
]

MOCK_STATS: dict[str, Any] = {
    "total_suppliers": 200,
    "critical_alerts": 15,
    "compliance_score": 78,
    "risk_distribution": {
        "critical": 13,
        "high": 35,
        "medium": 70,
        "low": 82,
    },
}
