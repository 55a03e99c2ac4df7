from __future__ import annotations

from collections.abc import Sequence

from date_reminder.models import Alert


def _format_urgency(days: int) -> str:
    if days == 0:
        return "TODAY"
    if days <= 3:
        return f"In {days} day(s)"
    return f"In {days} days"


def format_alert_text(alerts: Sequence[Alert]) -> str:
    return "\n".join(f"{_format_urgency(alert.days)} -- {alert.label}" for alert in alerts)
