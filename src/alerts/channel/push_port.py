"""Push transport port — abstract interface for device push delivery."""

from abc import ABC, abstractmethod


class PushPort(ABC):
    """Abstract interface for push transport adapters (FCM and friends)."""

    @abstractmethod
    def send_multicast(
        self,
        title: str,
        body: str,
        data: dict[str, str],
        tokens: list[str],
    ) -> list[dict]:
        """Send one notification to many device tokens in a single request.

        Returns:
            One dict per token, in token order, with keys: message_id,
            status ("sent" or "failed"), error (transport error code, optional).

        Raises:
            TransportInvocationError: the request could not be issued at all.
        """
        ...

    @abstractmethod
    def send_single(self, data: dict[str, str], token: str) -> dict:
        """Send a data-only message to one device token.

        Returns the same dict shape as a single ``send_multicast`` entry.
        Adapters may instead raise ``PermanentTokenError`` or
        ``TransientDeliveryError`` for a failed token.
        """
        ...
