"""Registry pruner — removes tokens the transport reported as permanently invalid."""

import structlog
from alerts.device.device import DeviceRegistration
from alerts.errors import RegistryWriteError
from protean.utils.globals import current_domain

logger = structlog.get_logger(__name__)


class RegistryPruner:
    """Applies one atomic removal batch per call.

    ``Transient`` and ``Unknown`` outcomes never cause a removal.
    """

    def __init__(self, registry=None):
        self.registry = registry if registry is not None else current_domain.repository_for(DeviceRegistration)

    @staticmethod
    def select(outcomes) -> list[str]:
        """Tokens whose outcome is PermanentlyInvalid, first occurrence order."""
        selected: list[str] = []
        for token, outcome in outcomes:
            if outcome.is_permanently_invalid and token not in selected:
                selected.append(token)
        return selected

    def prune(self, outcomes) -> int:
        tokens = self.select(outcomes)
        if not tokens:
            return 0

        try:
            removed = self.registry.remove_tokens(tokens)
        except Exception as exc:
            logger.error(
                "Failed to remove invalid device tokens",
                selected=len(tokens),
                error=str(exc),
            )
            raise RegistryWriteError(f"Could not remove {len(tokens)} invalid tokens: {exc}") from exc

        logger.info("Removed invalid device tokens", selected=len(tokens), removed=removed)
        return removed
