"""
Snapshot List Store

Holds one ordered list of view records that is replaced wholesale on
refresh and never mutated in place.
"""

import copy
import logging
import threading
import time
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from boardcache.core.exceptions import RepositoryError


logger = logging.getLogger(__name__)


class SnapshotList:
    """
    Immutable, atomically replaced list of records.

    The current snapshot is a private tuple of deep copies. Replacing it is
    a single reference swap under the lock, so a concurrent reader sees
    either the whole old list or the whole new one. Readers get their own
    deep copy.
    """

    def __init__(self, name: str):
        self.name = name
        self._entries: Tuple[Dict[str, Any], ...] = ()
        self._refreshed_at: Optional[float] = None
        self._lock = threading.Lock()

    def get(self) -> List[Dict[str, Any]]:
        """Return a copy of the current snapshot, empty if never refreshed."""
        with self._lock:
            entries = self._entries

        return copy.deepcopy(list(entries))

    def replace(self, records: Iterable[Dict[str, Any]]) -> None:
        """
        Swap in a new snapshot.

        The new tuple is fully built before the lock is taken.
        """
        entries = tuple(copy.deepcopy(list(records)))

        with self._lock:
            self._entries = entries
            self._refreshed_at = time.time()

    def refresh(self, loader: Callable[[], Iterable[Dict[str, Any]]]) -> bool:
        """
        Replace the snapshot with the records produced by loader.

        A RepositoryError raised by loader is logged and swallowed; the
        previous snapshot stays in place.

        Args:
            loader: Callable returning the new ordered records

        Returns:
            True if the snapshot was replaced
        """
        try:
            records = list(loader())
        except RepositoryError as e:
            logger.error(
                f"Loads {self.name} failed: {e.message} "
                f"({e.error_code.name}, trace {e.context.correlation_id})",
                exc_info=True
            )
            return False

        self.replace(records)
        logger.info(f"Loaded {len(records)} {self.name}")
        return True

    @property
    def refreshed_at(self) -> Optional[float]:
        """Epoch seconds of the last successful replacement."""
        return self._refreshed_at

    def __len__(self) -> int:
        return len(self._entries)
