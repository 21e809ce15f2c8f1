"""Alert inbox — read and resolve monitoring alerts."""

from __future__ import annotations

from collections.abc import Iterable

from supplyguard.models import Alert, AlertStatus


def mark_read(alert: Alert) -> Alert:
    """UNREAD becomes READ; read or resolved alerts are returned unchanged."""
    if alert.status != AlertStatus.UNREAD:
        return alert
    return alert.model_copy(update={"status": AlertStatus.READ})


def resolve(alert: Alert) -> Alert:
    if alert.status == AlertStatus.RESOLVED:
        return alert
    return alert.model_copy(update={"status": AlertStatus.RESOLVED})


def unread_count(alerts: Iterable[Alert]) -> int:
    return sum(1 for a in alerts if a.status == AlertStatus.UNREAD)
