from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

import httpx

from date_reminder.config_store import load_job_config
from date_reminder.date_logic import today_in_timezone
from date_reminder.document_store import FirestoreStore
from date_reminder.models import RunSummary
from date_reminder.notifier import EmailNotifier
from date_reminder.reminder_service import ReminderService
from date_reminder.settings import load_settings

LOGGER = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="date-reminder",
        description="Email each subscriber a digest of holidays and personal dates coming up this week.",
    )
    parser.add_argument("--config", type=Path, help="Path to the reminders TOML file")
    parser.add_argument("--dry-run", action="store_true", help="Build and log digests without sending")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


async def run_job(args: argparse.Namespace) -> RunSummary:
    settings = load_settings()
    config_path = args.config or settings.reminder_config_path
    job_config = load_job_config(config_path)

    store = FirestoreStore.from_service_account(settings.firebase_service_account)
    today = today_in_timezone(job_config.timezone)

    async with httpx.AsyncClient(timeout=job_config.request_timeout_seconds) as client:
        notifier = EmailNotifier(
            client=client,
            private_key=settings.emailjs_private_key,
            endpoint=job_config.email_endpoint,
        )
        service = ReminderService(
            store=store,
            notifier=notifier,
            job_config=job_config,
            dry_run=args.dry_run,
        )
        return await service.run(today)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        summary = asyncio.run(run_job(args))
    except Exception:
        LOGGER.exception("Fatal error during reminder run")
        return 1
    return summary.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
