"""In-app notification port — abstract interface for the notification sink."""

from abc import ABC, abstractmethod


class NotifierPort(ABC):
    """Abstract interface for in-app notification adapters."""

    @abstractmethod
    def notify(
        self,
        user_id: str,
        notification_type: str,
        title: str,
        message: str,
        meta: dict | None = None,
        action_url: str | None = None,
    ) -> dict:
        """Deliver a notification to a user's inbox.

        Returns:
            dict with keys: notification_id, status ("sent" or "failed"), error (optional)
        """
        ...
