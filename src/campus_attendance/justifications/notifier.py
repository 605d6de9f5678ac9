from __future__ import annotations

import logging
from typing import Protocol

from ..core.enums import JustificationStatus
from .model import Notification

logger = logging.getLogger(__name__)

MESSAGES = {
    JustificationStatus.PENDING: "Your justification for {day} was received and is awaiting review.",
    JustificationStatus.APPROVED: "Your justification for {day} was approved.",
    JustificationStatus.REJECTED: "Your justification for {day} was rejected: {comment}",
}


class Notifier(Protocol):
    """Outbound channel to the affected actor (push, mail, in-app feed...)."""

    def notify(self, notification: Notification) -> None:
        raise NotImplementedError


class LoggingNotifier:
    """Default channel: writes notifications to the application log."""

    def notify(self, notification: Notification) -> None:
        logger.info(
            "notify actor=%s record=%s status=%s: %s",
            notification.actor_id,
            notification.record_id,
            notification.status.value,
            notification.message,
        )
