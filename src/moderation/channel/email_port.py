"""Email channel port — abstract interface for templated email dispatch."""

from abc import ABC, abstractmethod


class EmailPort(ABC):
    """Abstract interface for email dispatch adapters."""

    @abstractmethod
    def send_templated_email(
        self,
        to: str,
        subject: str,
        template: str,
        data: dict,
    ) -> dict:
        """Render ``template`` with ``data`` and send it.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
