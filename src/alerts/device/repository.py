"""Device registry accessor — read/write access to registered push tokens.

The registry is the only shared mutable resource of the Alerts domain. Reads
return an ordered snapshot; the only write the delivery pipeline performs is
"remove these specific tokens", applied as one unit of work.
"""

from alerts.device.device import DeviceRegistration
from alerts.domain import alerts
from protean import UnitOfWork
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_uow

_PAGE_SIZE = 500


@alerts.repository(part_of=DeviceRegistration)
class DeviceRegistrationRepository:
    def find_by_token(self, token: str) -> DeviceRegistration | None:
        try:
            return self.get(token)
        except ObjectNotFoundError:
            return None

    def list_tokens(self) -> list[str]:
        """Snapshot of every registered token, oldest registration first."""
        tokens: list[str] = []
        offset = 0
        while True:
            page = self._dao.query.order_by("registered_at").offset(offset).limit(_PAGE_SIZE).all()
            tokens.extend(record.token for record in page.items if record.token)
            if len(page.items) < _PAGE_SIZE:
                break
            offset += _PAGE_SIZE
        return tokens

    def remove_tokens(self, tokens) -> int:
        """Remove the given tokens in a single unit of work.

        Tokens that are not registered (for instance already pruned by a
        concurrent sweep) are skipped. Returns the number actually removed.
        """
        unique = list(dict.fromkeys(tokens))
        if not unique:
            return 0

        # Join the caller's unit of work when a handler already opened one
        if current_uow:
            return self._remove_existing(unique)

        with UnitOfWork():
            return self._remove_existing(unique)

    def _remove_existing(self, tokens: list[str]) -> int:
        removed = 0
        for token in tokens:
            registration = self.find_by_token(token)
            if registration is None:
                continue
            self.remove(registration)
            removed += 1
        return removed
