"""Fake notifier adapter — records notifications for testing."""

from datetime import UTC, datetime
from uuid import uuid4

from moderation.channel.notifier_port import NotifierPort


class FakeNotifierAdapter(NotifierPort):
    """Notifier that records messages in memory for test assertions.

    ``configure(should_succeed=False)`` reports failures through the
    result; ``configure(raise_error=True)`` raises instead, like a sink
    whose connection dropped.
    """

    def __init__(self):
        self.notifications: list[dict] = []
        self.should_succeed = True
        self.raise_error = False
        self.failure_reason = "Notification delivery failed"

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Notification delivery failed",
        raise_error: bool = False,
    ):
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.raise_error = raise_error

    def notify(
        self,
        user_id: str,
        notification_type: str,
        title: str,
        message: str,
        meta: dict | None = None,
        action_url: str | None = None,
    ) -> dict:
        if self.raise_error:
            raise ConnectionError(self.failure_reason)
        if not self.should_succeed:
            return {"notification_id": None, "status": "failed", "error": self.failure_reason}

        notification_id = f"notif-{uuid4().hex[:12]}"
        self.notifications.append(
            {
                "notification_id": notification_id,
                "user_id": user_id,
                "type": notification_type,
                "title": title,
                "message": message,
                "meta": meta or {},
                "action_url": action_url,
                "created_at": datetime.now(UTC),
            }
        )
        return {"notification_id": notification_id, "status": "sent"}

    def for_user(self, user_id) -> list[dict]:
        return [n for n in self.notifications if n["user_id"] == str(user_id)]

    def reset(self):
        """Clear recorded notifications (useful between tests)."""
        self.notifications.clear()
        self.should_succeed = True
        self.raise_error = False
        self.failure_reason = "Notification delivery failed"
