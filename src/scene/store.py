import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.scene.models import SceneSnapshot

logger = logging.getLogger(__name__)


class SnapshotState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class SnapshotStatus:
    state: SnapshotState
    url: Optional[str] = None
    message: Optional[str] = None


class SnapshotStore:
    """Holds the current snapshot and the state of the latest fetch cycle.

    Each cycle takes a ticket from begin(). Only the most recently issued
    ticket may publish a result, so a slow, superseded cycle can never
    overwrite a newer one. A failed cycle leaves the previous snapshot in place.
    """

    def __init__(self):
        self.snapshot: Optional[SceneSnapshot] = None
        self.status = SnapshotStatus(SnapshotState.IDLE)
        self._latest_ticket = 0

    def begin(self, url: str) -> int:
        self._latest_ticket += 1
        self.status = SnapshotStatus(SnapshotState.PENDING, url=url)
        return self._latest_ticket

    def is_current(self, ticket: int) -> bool:
        return ticket == self._latest_ticket

    def resolve(self, ticket: int, snapshot: SceneSnapshot) -> bool:
        if not self.is_current(ticket):
            logger.info(f"Discarding snapshot from superseded request #{ticket}")
            return False
        self.snapshot = snapshot
        self.status = SnapshotStatus(
            SnapshotState.READY,
            url=self.status.url,
            message=f"Visualization ready. {snapshot.summary()}",
        )
        return True

    def fail(self, ticket: int, message: str) -> bool:
        if not self.is_current(ticket):
            logger.info(f"Ignoring failure from superseded request #{ticket}: {message}")
            return False
        self.status = SnapshotStatus(SnapshotState.FAILED, url=self.status.url, message=message)
        return True
