"""Quality upgrade policy."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wantarr.models.common import Quality, QualityType

logger = logging.getLogger(__name__)


def is_upgrade(current: Quality, candidate: Quality, cutoff: QualityType) -> bool:
    """Check if a candidate quality should replace the current one.

    Rules are evaluated in order and the first match wins:

    1. Current tier at or above the cutoff: no upgrade wanted.
    2. Candidate tier strictly higher: upgrade.
    3. Current tier strictly higher: no upgrade.
    4. Same tier: upgrade only to a proper when the current one is not a proper.

    Args:
        current: Quality of the file held (or grabbed) for an episode
        candidate: Quality of the release under evaluation
        cutoff: Tier of the series' quality profile that stops upgrades

    Returns:
        True if the candidate is an upgrade over current
    """
    if current.quality_type >= cutoff:
        logger.debug("Existing quality %s meets cutoff %s", current, cutoff.value)
        return False

    if candidate.quality_type > current.quality_type:
        return True

    if current.quality_type > candidate.quality_type:
        logger.debug("Existing quality %s is better than %s", current, candidate)
        return False

    if candidate.proper and not current.proper:
        logger.debug("Proper %s replaces %s", candidate, current)
        return True

    logger.debug("Same quality %s, not a new proper", candidate)
    return False
