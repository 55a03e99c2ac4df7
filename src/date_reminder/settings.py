from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class Settings:
    firebase_service_account: dict[str, Any]
    emailjs_private_key: str | None
    reminder_config_path: Path


def _required_env(name: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        raise ValueError(f"Missing required environment variable: {name}")
    return value.strip()


def _optional_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _parse_service_account(raw: str) -> dict[str, Any]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"FIREBASE_SERVICE_ACCOUNT is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("FIREBASE_SERVICE_ACCOUNT must be a JSON object")
    return data


def load_settings() -> Settings:
    root = Path.cwd()

    service_account = _parse_service_account(_required_env("FIREBASE_SERVICE_ACCOUNT"))
    private_key = _optional_env("EMAILJS_PRIVATE_KEY")

    reminder_config_path = Path(
        os.getenv("REMINDER_CONFIG_PATH", root / "config" / "reminders.toml")
    )

    return Settings(
        firebase_service_account=service_account,
        emailjs_private_key=private_key,
        reminder_config_path=reminder_config_path,
    )
