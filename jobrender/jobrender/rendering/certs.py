"""Pass-through emission of TLS certificates and keys."""

from __future__ import annotations

import logging

from ..core.models import CertificateSlot
from ..core.tree import ABSENT, ConfigTree, ConfigTreeError

logger = logging.getLogger(__name__)


def emit_certificate(tree: ConfigTree, slot: CertificateSlot) -> str | None:
    """Return the PEM text configured for *slot*, unmodified.

    Returns None when the slot is not configured; callers treat that as the
    TLS feature being off.
    """
    value = tree.get(slot.property_path)
    if value is ABSENT:
        logger.debug(f"No {slot.value} configured")
        return None
    if not isinstance(value, str):
        raise ConfigTreeError(
            f"{slot.property_path} must be a string, got {type(value).__name__}"
        )
    return value
