from __future__ import annotations

import logging
from typing import Any

import firebase_admin
from firebase_admin import credentials, firestore

from date_reminder.models import CustomDate, EmailConfig, Person, Subscriber

LOGGER = logging.getLogger(__name__)

CONFIG_COLLECTION = "config"
EMAIL_CONFIG_DOCUMENT = "emailConfig"
PEOPLE_COLLECTION = "wives"
SUBSCRIBERS_COLLECTION = "subscribers"


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def email_config_from_dict(data: dict[str, Any]) -> EmailConfig:
    return EmailConfig(
        service_id=str(data.get("serviceId") or "").strip(),
        template_id=str(data.get("templateId") or "").strip(),
        pub_key=str(data.get("pubKey") or "").strip(),
        sender=_optional_str(data.get("sender")),
    )


def person_from_dict(data: dict[str, Any]) -> Person:
    custom: list[CustomDate] = []
    rows = data.get("custom")
    if isinstance(rows, list):
        for row in rows:
            if not isinstance(row, dict):
                continue
            custom.append(CustomDate(label=str(row.get("label", "")), date=str(row.get("date", ""))))

    return Person(
        name=str(data.get("name", "")),
        birthday=_optional_str(data.get("birthday")),
        anniversary=_optional_str(data.get("anniversary")),
        custom=tuple(custom),
        owner_email=_optional_str(data.get("ownerEmail")),
    )


def subscriber_from_dict(data: dict[str, Any]) -> Subscriber:
    return Subscriber(
        name=str(data.get("name", "")),
        email=str(data.get("email", "")).strip(),
    )


class FirestoreStore:
    """Read-only view over the reminder collections."""

    def __init__(self, client) -> None:
        self._client = client

    @classmethod
    def from_service_account(cls, service_account: dict[str, Any]) -> FirestoreStore:
        app = firebase_admin.initialize_app(credentials.Certificate(service_account))
        return cls(firestore.client(app))

    def load_email_config(self) -> EmailConfig | None:
        snapshot = self._client.collection(CONFIG_COLLECTION).document(EMAIL_CONFIG_DOCUMENT).get()
        if not snapshot.exists:
            return None
        return email_config_from_dict(snapshot.to_dict() or {})

    def load_people(self) -> list[Person]:
        return [
            person_from_dict(snapshot.to_dict() or {})
            for snapshot in self._client.collection(PEOPLE_COLLECTION).stream()
        ]

    def load_subscribers(self) -> list[Subscriber]:
        subscribers: list[Subscriber] = []
        for snapshot in self._client.collection(SUBSCRIBERS_COLLECTION).stream():
            subscriber = subscriber_from_dict(snapshot.to_dict() or {})
            if not subscriber.email:
                LOGGER.warning("Ignoring subscriber document %s without an email", snapshot.id)
                continue
            subscribers.append(subscriber)
        return subscribers
