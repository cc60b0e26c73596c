"""
Email sender port.
"""
from abc import ABC, abstractmethod


class EmailSender(ABC):
    """Interface for the outbound email provider."""

    @abstractmethod
    async def send(self, to: str, subject: str, html: str) -> str:
        """
        Send one HTML email.

        Args:
            to: Recipient address
            subject: Subject line
            html: HTML body

        Returns:
            Provider message id

        Raises:
            EmailDeliveryError: If the provider rejects or cannot be reached
        """
