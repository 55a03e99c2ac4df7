from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date

from date_reminder.date_logic import InvalidDateError, days_until, days_until_fixed
from date_reminder.models import DEFAULT_GLOBAL_DATES, Alert, AlertMode, GlobalDate, Person

LOGGER = logging.getLogger(__name__)


def is_visible_to(person: Person, subscriber_email: str | None, mode: AlertMode) -> bool:
    # Records without an owner predate ownership and stay visible to everyone.
    if mode is AlertMode.BROADCAST or subscriber_email is None:
        return True
    if not person.owner_email:
        return True
    return person.owner_email.strip().lower() == subscriber_email.strip().lower()


def person_events(person: Person) -> list[tuple[str, str]]:
    events: list[tuple[str, str]] = []
    if person.birthday:
        events.append((f"{person.name}'s Birthday", person.birthday))
    if person.anniversary:
        events.append((f"{person.name}'s Anniversary", person.anniversary))
    for entry in person.custom:
        events.append((f"{entry.label} ({person.name})", entry.date))
    return events


def build_alerts(
    people: Iterable[Person],
    subscriber_email: str | None,
    max_days: int,
    today: date,
    *,
    mode: AlertMode = AlertMode.OWNER_SCOPED,
    global_dates: Iterable[GlobalDate] = DEFAULT_GLOBAL_DATES,
    leap_day_rule: str = "mar1",
) -> list[Alert]:
    """Collect holidays and personal dates due within ``max_days`` of ``today``.

    Holidays are appended first, and the final sort is stable, so a holiday
    is listed ahead of a personal date falling on the same day.
    """
    alerts: list[Alert] = []

    for holiday in global_dates:
        days = days_until_fixed(holiday.month, holiday.day, today, leap_day_rule)
        if days <= max_days:
            alerts.append(Alert(label=holiday.name, days=days))

    for person in people:
        if not is_visible_to(person, subscriber_email, mode):
            continue

        for label, value in person_events(person):
            try:
                days = days_until(value, today, leap_day_rule)
            except InvalidDateError as exc:
                LOGGER.warning("Skipping %s: %s", label, exc)
                continue
            if days <= max_days:
                alerts.append(Alert(label=label, days=days))

    alerts.sort(key=lambda alert: alert.days)
    return alerts
