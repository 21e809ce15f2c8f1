"""In-memory session store for SupplyGuard.

Holds the suppliers, alerts, statistics and assistant conversations of a
single dashboard session. Records are immutable; every change replaces the
stored value with a new snapshot.
"""

from __future__ import annotations

from supplyguard.mock_data import MOCK_ALERTS, MOCK_STATS, MOCK_SUPPLIERS
from supplyguard.models import Alert, AlertStatus, ComplianceStats, RiskDistribution, Supplier
from supplyguard.schemas.capability import ChatMessage


class DataStore:
    """Session-scoped owned collections keyed by id."""

    def __init__(self) -> None:
        self.suppliers: dict[str, Supplier] = {}
        self.alerts: dict[str, Alert] = {}
        self.stats: ComplianceStats = ComplianceStats(
            total_suppliers=0,
            critical_alerts=0,
            compliance_score=0,
            risk_distribution=RiskDistribution(),
        )
        self.chat_sessions: dict[str, list[ChatMessage]] = {}  # session_id -> transcript
        self.validations_in_flight: set[str] = set()  # supplier ids
        self.chats_in_flight: set[str] = set()  # session ids

    def reset(self) -> None:
        """Clear all data — used in tests."""
        self.__init__()

    def seed(self) -> None:
        """Load the mock fixture into an empty session."""
        for raw in MOCK_SUPPLIERS:
            self.put_supplier(Supplier.model_validate(raw))
        for raw in MOCK_ALERTS:
            self.put_alert(Alert.model_validate(raw))
        self.stats = ComplianceStats.model_validate(MOCK_STATS)

    def list_suppliers(self) -> list[Supplier]:
        return list(self.suppliers.values())

    def get_supplier(self, supplier_id: str) -> Supplier | None:
        return self.suppliers.get(supplier_id)

    def put_supplier(self, supplier: Supplier) -> None:
        """Add or replace a supplier snapshot, keeping its list position."""
        self.suppliers[supplier.id] = supplier

    def prepend_suppliers(self, suppliers: list[Supplier]) -> None:
        """Add newly ingested suppliers ahead of existing ones."""
        new = {s.id: s for s in suppliers}
        self.suppliers = {**new, **{k: v for k, v in self.suppliers.items() if k not in new}}

    def list_alerts(self, status: AlertStatus | None = None) -> list[Alert]:
        """Alerts newest first, optionally filtered by status."""
        alerts = [a for a in self.alerts.values() if status is None or a.status == status]
        return sorted(alerts, key=lambda a: a.created_at, reverse=True)

    def get_alert(self, alert_id: str) -> Alert | None:
        return self.alerts.get(alert_id)

    def put_alert(self, alert: Alert) -> None:
        self.alerts[alert.id] = alert

    def get_chat(self, session_id: str) -> list[ChatMessage] | None:
        return self.chat_sessions.get(session_id)

    def append_chat(self, session_id: str, *messages: ChatMessage) -> None:
        self.chat_sessions.setdefault(session_id, []).extend(messages)


# Global singleton, reset between tests
data_store = DataStore()
