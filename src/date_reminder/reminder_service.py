from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import date
from typing import Protocol

from date_reminder.alert_builder import build_alerts
from date_reminder.digest import format_alert_text
from date_reminder.models import EmailConfig, JobConfig, Person, RunSummary, Subscriber
from date_reminder.notifier import EmailDeliveryError

LOGGER = logging.getLogger(__name__)


class ReminderStore(Protocol):
    def load_email_config(self) -> EmailConfig | None: ...

    def load_people(self) -> list[Person]: ...

    def load_subscribers(self) -> list[Subscriber]: ...


class Notifier(Protocol):
    async def send_email(self, to_address: str, body_text: str, config: EmailConfig) -> None: ...


class ReminderService:
    def __init__(
        self,
        *,
        store: ReminderStore,
        notifier: Notifier,
        job_config: JobConfig,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        dry_run: bool = False,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._job_config = job_config
        self._sleep = sleep
        self._dry_run = dry_run

    async def run(self, today: date) -> RunSummary:
        summary = RunSummary()
        LOGGER.info("Starting daily reminder check for %s", today.isoformat())

        email_config = self._store.load_email_config()
        if email_config is None:
            LOGGER.info("No email config found in the document store, nothing to do")
            return summary
        if not email_config.is_complete():
            LOGGER.warning("Email config incomplete (missing serviceId/templateId/pubKey), nothing to do")
            return summary

        people = self._store.load_people()
        LOGGER.info("Found %s people", len(people))
        subscribers = self._store.load_subscribers()
        LOGGER.info("Found %s subscriber(s)", len(subscribers))

        if not subscribers:
            LOGGER.info("No subscribers, done")
            return summary

        pending_pause = False
        for subscriber in subscribers:
            alerts = build_alerts(
                people,
                subscriber.email,
                self._job_config.lookahead_days,
                today,
                mode=self._job_config.alert_mode,
                global_dates=self._job_config.global_dates,
                leap_day_rule=self._job_config.leap_day_rule,
            )
            if not alerts:
                LOGGER.info("%s: no upcoming dates, skipping", subscriber.name)
                summary.skipped += 1
                continue

            text = format_alert_text(alerts)
            LOGGER.info("%s: %s alert(s)", subscriber.name, len(alerts))
            for line in text.split("\n"):
                LOGGER.info("    %s", line)

            if self._dry_run:
                LOGGER.info("Dry run, not sending to %s (%s)", subscriber.name, subscriber.email)
                summary.previewed += 1
                continue

            # Provider allows roughly one request per second.
            if pending_pause:
                await self._sleep(self._job_config.send_delay_seconds)

            try:
                await self._notifier.send_email(subscriber.email, text, email_config)
            except EmailDeliveryError as exc:
                LOGGER.error("Failed for %s: %s", subscriber.email, exc)
                summary.failed += 1
            else:
                LOGGER.info("Sent to %s (%s)", subscriber.name, subscriber.email)
                summary.sent += 1
            pending_pause = True

        if self._dry_run:
            LOGGER.info(
                "Done. Sent: %s, Skipped: %s, Failed: %s, Previewed: %s",
                summary.sent,
                summary.skipped,
                summary.failed,
                summary.previewed,
            )
        else:
            LOGGER.info(
                "Done. Sent: %s, Skipped: %s, Failed: %s",
                summary.sent,
                summary.skipped,
                summary.failed,
            )
        return summary
