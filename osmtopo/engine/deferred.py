"""DeferredQueue — composites whose members were not all available on first sight."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)


class DeferredQueue:
    """Ordered, deduplicated FIFO of composite ids.

    ``was_queued`` keeps answering True for an id after it has been drained,
    so a composite is never deferred twice in the same run.
    """

    def __init__(self) -> None:
        self._pending: list[str] = []
        self._seen: set[str] = set()

    def push(self, composite_id: str) -> bool:
        if composite_id in self._seen:
            return False
        self._seen.add(composite_id)
        self._pending.append(composite_id)
        logger.debug("Deferred composite %s (%d pending)", composite_id, len(self._pending))
        return True

    def was_queued(self, composite_id: str) -> bool:
        return composite_id in self._seen

    def pending(self) -> list[str]:
        return list(self._pending)

    def retain(self, composite_ids: Iterable[str]) -> None:
        """Rebuild the pending list from the ids still unresolved after a drain."""
        keep = set(composite_ids)
        self._pending = [cid for cid in self._pending if cid in keep]

    def __contains__(self, composite_id: object) -> bool:
        return composite_id in self._pending

    def __len__(self) -> int:
        return len(self._pending)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._pending))
