from __future__ import annotations

import enum
from dataclasses import dataclass, field


DEFAULT_SENDER_NAME = "Date Reminder"


class AlertMode(enum.Enum):
    BROADCAST = "broadcast"
    OWNER_SCOPED = "owner_scoped"


@dataclass(frozen=True)
class GlobalDate:
    name: str
    month: int
    day: int


DEFAULT_GLOBAL_DATES = (
    GlobalDate(name="Valentine's Day", month=2, day=14),
    GlobalDate(name="International Women's Day", month=3, day=8),
    GlobalDate(name="Mother's Day", month=5, day=11),
    GlobalDate(name="Vietnamese Women's Day", month=10, day=20),
    GlobalDate(name="Christmas", month=12, day=25),
)


@dataclass(frozen=True)
class CustomDate:
    label: str
    date: str


@dataclass(frozen=True)
class Person:
    name: str
    birthday: str | None = None
    anniversary: str | None = None
    custom: tuple[CustomDate, ...] = ()
    owner_email: str | None = None


@dataclass(frozen=True)
class Subscriber:
    name: str
    email: str


@dataclass(frozen=True)
class EmailConfig:
    service_id: str
    template_id: str
    pub_key: str
    sender: str | None = None

    def is_complete(self) -> bool:
        return bool(self.service_id and self.template_id and self.pub_key)


@dataclass(frozen=True)
class Alert:
    label: str
    days: int


@dataclass(frozen=True)
class JobConfig:
    timezone: str | None = None
    lookahead_days: int = 7
    send_delay_seconds: float = 1.1
    alert_mode: AlertMode = AlertMode.OWNER_SCOPED
    leap_day_rule: str = "mar1"
    email_endpoint: str = "https://api.emailjs.com/api/v1.0/email/send"
    request_timeout_seconds: float = 30.0
    global_dates: tuple[GlobalDate, ...] = field(default=DEFAULT_GLOBAL_DATES)


@dataclass
class RunSummary:
    sent: int = 0
    skipped: int = 0
    failed: int = 0
    previewed: int = 0

    @property
    def exit_code(self) -> int:
        return 1 if self.failed > 0 else 0
