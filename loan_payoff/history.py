"""In-memory history of saved simulation results.

The interactive surfaces let a user "snapshot" the current result so several
payment plans can be compared side by side. The history is owned by the
caller (the web session or a CLI invocation); nothing is written to disk.
Entries are only ever appended or cleared all at once.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional

from .data_models import Snapshot

logger = logging.getLogger(__name__)


class SnapshotHistory:
    """Ordered collection of snapshots, oldest first."""

    def __init__(self, snapshots: Iterable[Snapshot] = (), *, max_size: Optional[int] = None) -> None:
        self._max_size = max_size
        self._snapshots: List[Snapshot] = list(snapshots)
        self._trim()

    def __iter__(self) -> Iterator[Snapshot]:
        return iter(self._snapshots)

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def latest(self) -> Optional[Snapshot]:
        return self._snapshots[-1] if self._snapshots else None

    def add(self, snapshot: Snapshot) -> None:
        self._snapshots.append(snapshot)
        self._trim()

    def clear(self) -> None:
        self._snapshots = []

    def to_list(self) -> List[Dict[str, Any]]:
        return [s.to_dict() for s in self._snapshots]

    @classmethod
    def from_list(cls, rows: Optional[Iterable[Dict[str, Any]]], *, max_size: Optional[int] = None) -> "SnapshotHistory":
        """Rebuild a history from :meth:`to_list` output, skipping bad rows."""
        snapshots: List[Snapshot] = []
        for row in rows or []:
            try:
                snapshots.append(Snapshot.from_dict(row))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Dropping malformed snapshot %r: %s", row, exc)
        return cls(snapshots, max_size=max_size)

    def _trim(self) -> None:
        # Keep only the newest ``max_size`` entries.
        if not self._max_size or self._max_size < 0:
            return
        if len(self._snapshots) > self._max_size:
            del self._snapshots[: len(self._snapshots) - self._max_size]
