from pathlib import Path

import pytest

from date_reminder.config_store import load_job_config, parse_job_config
from date_reminder.models import DEFAULT_GLOBAL_DATES, AlertMode, GlobalDate, JobConfig


def test_missing_file_uses_defaults(tmp_path: Path) -> None:
    config = load_job_config(tmp_path / "reminders.toml")

    assert config == JobConfig()
    assert config.lookahead_days == 7
    assert config.send_delay_seconds == 1.1
    assert config.alert_mode is AlertMode.OWNER_SCOPED
    assert config.global_dates == DEFAULT_GLOBAL_DATES


def test_load_full_config(tmp_path: Path) -> None:
    path = tmp_path / "reminders.toml"
    path.write_text(
        """
timezone = "Asia/Ho_Chi_Minh"
lookahead_days = 3
send_delay_seconds = 2
alert_mode = "broadcast"
leap_day_rule = "feb28"

[[global_dates]]
name = "New Year"
month = 1
day = 1
""".strip()
        + "\n",
        encoding="utf-8",
    )

    config = load_job_config(path)

    assert config.timezone == "Asia/Ho_Chi_Minh"
    assert config.lookahead_days == 3
    assert config.send_delay_seconds == 2.0
    assert config.alert_mode is AlertMode.BROADCAST
    assert config.leap_day_rule == "feb28"
    assert config.global_dates == (GlobalDate(name="New Year", month=1, day=1),)


def test_empty_global_dates_disables_holidays() -> None:
    assert parse_job_config({"global_dates": []}).global_dates == ()


@pytest.mark.parametrize(
    "data",
    [
        {"lookahead_days": -1},
        {"lookahead_days": "7"},
        {"send_delay_seconds": -0.5},
        {"alert_mode": "everyone"},
        {"leap_day_rule": "skip"},
        {"timezone": "Mars/Olympus_Mons"},
        {"email_endpoint": "ftp://example.com"},
        {"request_timeout_seconds": 0},
        {"global_dates": [{"name": "Bad", "month": 2, "day": 30}]},
        {"global_dates": [{"name": "", "month": 1, "day": 1}]},
        {"global_dates": [1]},
        {"global_dates": "Christmas"},
        {"global_dates": [{"name": "Truncated", "month": 2.9, "day": 14}]},
        {"global_dates": [{"name": "Boolean", "month": True, "day": 14}]},
        {"global_dates": [{"name": "Text", "month": 12, "day": "25"}]},
    ],
)
def test_invalid_values_rejected(data: dict) -> None:
    with pytest.raises(ValueError):
        parse_job_config(data)


def test_global_date_error_names_the_key() -> None:
    with pytest.raises(ValueError, match="month"):
        parse_job_config({"global_dates": [{"name": "Truncated", "month": 2.9, "day": 14}]})

    with pytest.raises(ValueError, match="global_dates"):
        parse_job_config({"global_dates": [1]})
