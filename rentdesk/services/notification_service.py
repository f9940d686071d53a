"""Notification sink: in-app notification rows plus optional e-mail delivery.

Recording can join the caller's transaction (``record``) or run as its own
best-effort unit after the caller has committed (``notify``). Delivery is
always best-effort.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from rentdesk.core.exceptions import NotFoundError
from rentdesk.models import Notification, User, UserRole
from rentdesk.services.base_service import BaseService
from rentdesk.services.email_sender import EmailSender
from rentdesk.services.user_service import UserService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationEvent:
    recipient_id: int
    title: str
    message: str


class NotificationService(BaseService):
    """Service for user notifications."""

    def __init__(self, db: Session | None = None, email_sender: EmailSender | None = None) -> None:
        super().__init__(db)
        self.email_sender = email_sender or EmailSender()

    def record(self, event: NotificationEvent) -> Notification:
        """Add the row to the current transaction without committing."""
        notification = Notification(user_id=event.recipient_id, title=event.title, message=event.message)
        self.db.add(notification)
        self.db.flush()
        return notification

    def notify(self, recipient_id: int, title: str, message: str) -> bool:
        """Record and deliver one notification; never raises."""
        event = NotificationEvent(recipient_id=recipient_id, title=title, message=message)
        try:
            with self.transaction():
                self.record(event)
        except Exception:
            logger.exception(
                "notification.record_failed",
                extra={"event": "notification.record_failed", "recipient_id": recipient_id, "title": title},
            )
            return False
        logger.info(
            "notification.recorded",
            extra={"event": "notification.recorded", "recipient_id": recipient_id, "title": title},
        )
        self.deliver([event])
        return True

    def notify_all(self, events: Iterable[NotificationEvent]) -> int:
        """Best-effort fan-out; returns how many notifications were recorded."""
        return sum(1 for event in events if self.notify(event.recipient_id, event.title, event.message))

    def notify_role(self, role: UserRole, title: str, message: str) -> int:
        """Best-effort fan-out to every user holding ``role``, recipient lookup included."""
        try:
            recipient_ids = UserService(self.db).list_ids_by_role(role)
        except Exception:
            self.db.rollback()
            logger.exception(
                "notification.recipients_failed",
                extra={"event": "notification.recipients_failed", "role": role.value, "title": title},
            )
            return 0
        return self.notify_all(
            NotificationEvent(recipient_id=recipient_id, title=title, message=message)
            for recipient_id in recipient_ids
        )

    def deliver(self, events: Iterable[NotificationEvent]) -> None:
        """Attempt e-mail delivery for already-recorded notifications."""
        if not self.email_sender.enabled:
            return
        for event in events:
            try:
                user = self.db.get(User, event.recipient_id)
                if user is None or not user.email:
                    continue
                self.email_sender.send_email(user.email, event.title, event.message)
            except Exception:
                logger.exception(
                    "notification.delivery_failed",
                    extra={"event": "notification.delivery_failed", "recipient_id": event.recipient_id},
                )

    def list_for_user(self, user_id: int) -> list[Notification]:
        stmt = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
        )
        return list(self.db.scalars(stmt))

    def mark_read(self, notification_id: int, user_id: int) -> Notification:
        with self.transaction():
            notification = self.db.scalar(
                select(Notification).where(Notification.id == notification_id, Notification.user_id == user_id)
            )
            if notification is None:
                raise NotFoundError("Notification does not exist or does not belong to you.")
            notification.is_read = True
        return notification
