"""
Bidder Store: Concurrency-safe keyed storage for bidder records.
"""

import threading
import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Dict, List

from auction.bidder import Bidder
from auction.errors import BidderNotFoundError, DuplicateBidderError


class RWLock:
    """
    Reader/writer lock built on a single Condition.

    Any number of readers may hold the lock together; a writer holds it
    alone. Waiting writers block new readers so writes are not starved.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self):
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self):
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self):
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self):
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self):
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class BidderStore(ABC):
    """Storage operations the auction engine needs."""

    @abstractmethod
    def add_bidder(self, bidder: Bidder) -> None:
        """Insert a new bidder. Raises DuplicateBidderError if the ID exists."""

    @abstractmethod
    def get_bidder(self, bidder_id: uuid.UUID) -> Bidder:
        """Return a copy of a bidder. Raises BidderNotFoundError if absent."""

    @abstractmethod
    def update_bidder(self, bidder: Bidder) -> None:
        """Overwrite a stored bidder. Raises BidderNotFoundError if absent."""

    @abstractmethod
    def list_bidders(self) -> List[Bidder]:
        """Return a snapshot of all bidders in unspecified order."""


class InMemoryStore(BidderStore):
    """
    In-memory bidder store guarded by one reader/writer lock.

    Records go in and come out as copies; no caller ever holds a live
    reference into the store, so changes only land through update_bidder.
    """

    def __init__(self):
        self._lock = RWLock()
        self._bidders: Dict[uuid.UUID, Bidder] = {}

    def add_bidder(self, bidder: Bidder) -> None:
        with self._lock.write_locked():
            if bidder.id in self._bidders:
                raise DuplicateBidderError(bidder.id)
            self._bidders[bidder.id] = bidder.copy()

    def get_bidder(self, bidder_id: uuid.UUID) -> Bidder:
        with self._lock.read_locked():
            bidder = self._bidders.get(bidder_id)
            if bidder is None:
                raise BidderNotFoundError(bidder_id)
            return bidder.copy()

    def update_bidder(self, bidder: Bidder) -> None:
        with self._lock.write_locked():
            if bidder.id not in self._bidders:
                raise BidderNotFoundError(bidder.id)
            self._bidders[bidder.id] = bidder.copy()

    def list_bidders(self) -> List[Bidder]:
        with self._lock.read_locked():
            return [bidder.copy() for bidder in self._bidders.values()]

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._bidders)

    def __contains__(self, bidder_id) -> bool:
        with self._lock.read_locked():
            return bidder_id in self._bidders
