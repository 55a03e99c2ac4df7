from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from date_reminder.date_logic import ALLOWED_LEAP_DAY_RULES, InvalidDateError, validate_month_day
from date_reminder.models import DEFAULT_GLOBAL_DATES, AlertMode, GlobalDate, JobConfig


def _parse_timezone(value: Any) -> str | None:
    if value is None:
        return None
    timezone = str(value).strip()
    if not timezone:
        return None
    try:
        ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"timezone is not a known IANA zone: {timezone}") from exc
    return timezone


def _parse_non_negative_int(data: dict[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{key} must be a non-negative integer")
    return value


def _parse_non_negative_float(data: dict[str, Any], key: str, default: float) -> float:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise ValueError(f"{key} must be a non-negative number")
    return float(value)


def _parse_alert_mode(value: Any) -> AlertMode:
    try:
        return AlertMode(str(value).strip().lower())
    except ValueError as exc:
        allowed = sorted(mode.value for mode in AlertMode)
        raise ValueError(f"alert_mode must be one of {allowed}") from exc


def _parse_global_dates(rows: Any) -> tuple[GlobalDate, ...]:
    if not isinstance(rows, list):
        raise ValueError("global_dates must be an array of tables")

    global_dates: list[GlobalDate] = []
    for row in rows:
        if not isinstance(row, dict):
            raise ValueError("global_dates entries must be tables with name, month and day")

        name = str(row.get("name", "")).strip()
        if not name:
            raise ValueError("global date name must not be empty")

        month = _parse_non_negative_int(row, "month", 0)
        day = _parse_non_negative_int(row, "day", 0)
        try:
            validate_month_day(month, day)
        except InvalidDateError as exc:
            raise ValueError(f"{name}: {exc}") from exc

        global_dates.append(GlobalDate(name=name, month=month, day=day))
    return tuple(global_dates)


def parse_job_config(data: dict[str, Any]) -> JobConfig:
    defaults = JobConfig()

    leap_day_rule = str(data.get("leap_day_rule", defaults.leap_day_rule)).strip().lower()
    if leap_day_rule not in ALLOWED_LEAP_DAY_RULES:
        raise ValueError(f"leap_day_rule must be one of {sorted(ALLOWED_LEAP_DAY_RULES)}")

    email_endpoint = str(data.get("email_endpoint", defaults.email_endpoint)).strip()
    if not email_endpoint.startswith(("https://", "http://")):
        raise ValueError("email_endpoint must be an http(s) URL")

    request_timeout = _parse_non_negative_float(
        data, "request_timeout_seconds", defaults.request_timeout_seconds
    )
    if request_timeout == 0:
        raise ValueError("request_timeout_seconds must be greater than zero")

    if "global_dates" in data:
        global_dates = _parse_global_dates(data["global_dates"])
    else:
        global_dates = DEFAULT_GLOBAL_DATES

    return JobConfig(
        timezone=_parse_timezone(data.get("timezone")),
        lookahead_days=_parse_non_negative_int(data, "lookahead_days", defaults.lookahead_days),
        send_delay_seconds=_parse_non_negative_float(data, "send_delay_seconds", defaults.send_delay_seconds),
        alert_mode=_parse_alert_mode(data.get("alert_mode", defaults.alert_mode.value)),
        leap_day_rule=leap_day_rule,
        email_endpoint=email_endpoint,
        request_timeout_seconds=request_timeout,
        global_dates=global_dates,
    )


def load_job_config(path: Path) -> JobConfig:
    if not path.exists():
        return JobConfig()

    with path.open("rb") as file_obj:
        data = tomllib.load(file_obj)

    return parse_job_config(data)
