"""
Auction Engine: Validated proxy bidding and winner determination.

Each bidder bids through an automatic proxy: every placement raises the
bidder's current bid by its fixed increment, bounded by its starting and
maximum bids. Winner selection scans a snapshot of all bidders.
"""

import logging
import threading
import time
import uuid
from contextlib import nullcontext
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from auction.bidder import Bidder, BidderConfig, to_bidders
from auction.config import EngineConfig
from auction.errors import (
    AuctionError,
    BelowStartingBidError,
    BidderNotFoundError,
    BidNotIncreasingError,
    ExceededMaxBidError,
    InvalidAuctionConfigError,
    NoWinnerError,
)
from auction.store import BidderStore, InMemoryStore
from auction.validation import validate_auction_config
from observability import metrics
from observability.tracing import create_span

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Winner:
    """Winning bidder of an auction"""

    id: uuid.UUID
    name: str


class Auction:
    """
    A single auction over a fixed set of bidders.

    The auction owns its store exclusively. Bids for the same bidder are
    serialized by a per-bidder lock so the read-modify-write in place_bid
    cannot lose updates; bids for different bidders only contend on the
    store's lock.
    """

    def __init__(
        self,
        auction_id: uuid.UUID,
        store: BidderStore,
        clock: Callable[[], int] = time.monotonic_ns,
        config: Optional[EngineConfig] = None,
    ):
        """
        Initialize an auction around an already seeded store.

        Most callers want new_auction(), which validates and seeds.

        Args:
            auction_id: Auction identifier
            store: Bidder store owned by this auction
            clock: Monotonic nanosecond clock used for the tie-break
            config: Optional engine configuration
        """
        self.id = auction_id
        self.config = config or EngineConfig()
        self._store = store
        self._clock = clock
        self._bidder_locks: Dict[uuid.UUID, threading.Lock] = {
            bidder.id: threading.Lock() for bidder in store.list_bidders()
        }

    @classmethod
    def create(cls, bidders: Sequence[BidderConfig], **kwargs) -> "Auction":
        return new_auction(bidders, **kwargs)

    def _span(self, name: str, **attributes):
        if not self.config.tracing_enabled:
            return nullcontext()
        return create_span(name, {"auction_id": self.id, **attributes})

    def place_bid(self, bidder_id: uuid.UUID) -> None:
        """
        Place the next automatic bid for a bidder.

        The bid amount is always current_bid + auto_increment.

        Args:
            bidder_id: Bidder placing the bid

        Raises:
            BidderNotFoundError: Unknown bidder
            BelowStartingBidError: Bid would be below the starting bid
            ExceededMaxBidError: Bid would exceed the max bid; stop bidding for this bidder
            BidNotIncreasingError: Bid would not exceed the current bid
        """
        exhausted = None
        with self._span("auction.place_bid", bidder_id=bidder_id) as span:
            try:
                self._measured_place_bid(bidder_id)
            except ExceededMaxBidError as e:
                # Expected end of bidding; leave the span status unset.
                if span is not None:
                    span.set_attribute("auction.exceeded_max_bid", True)
                exhausted = e
        if exhausted is not None:
            raise exhausted

    def _measured_place_bid(self, bidder_id: uuid.UUID) -> None:
        if not self.config.metrics_enabled:
            self._place_bid(bidder_id)
            return
        with metrics.place_bid_latency.time():
            try:
                self._place_bid(bidder_id)
            except AuctionError as e:
                metrics.record_bid_rejected(_rejection_reason(e))
                raise
        metrics.record_bid_placed()

    def _place_bid(self, bidder_id: uuid.UUID) -> None:
        lock = self._bidder_locks.get(bidder_id)
        if lock is None:
            raise BidderNotFoundError(bidder_id)

        with lock:
            bidder = self._store.get_bidder(bidder_id)

            bid_amount = bidder.current_bid + bidder.auto_increment

            if bid_amount < bidder.starting_bid:
                logger.warning(
                    f"[AUCTION] Rejected bid from {bidder.name}: "
                    f"${bid_amount:.2f} below starting bid ${bidder.starting_bid:.2f}"
                )
                raise BelowStartingBidError(
                    f"bid amount ${bid_amount:.2f} is less than starting bid "
                    f"${bidder.starting_bid:.2f}"
                )
            if bid_amount > bidder.max_bid:
                logger.info(
                    f"[AUCTION] {bidder.name} reached max bid ${bidder.max_bid:.2f} "
                    f"(current ${bidder.current_bid:.2f})"
                )
                raise ExceededMaxBidError(
                    f"bid amount ${bid_amount:.2f} is greater than max bid "
                    f"${bidder.max_bid:.2f}"
                )
            if bid_amount <= bidder.current_bid:
                logger.warning(
                    f"[AUCTION] Rejected bid from {bidder.name}: "
                    f"${bid_amount:.2f} does not raise current bid"
                )
                raise BidNotIncreasingError(
                    f"bid amount ${bid_amount:.2f} is less than or equal to current bid "
                    f"${bidder.current_bid:.2f}"
                )

            bidder.current_bid = bid_amount
            bidder.last_bid_time = self._clock()
            self._store.update_bidder(bidder)

        logger.debug(f"[AUCTION] Accepted bid from {bidder.name}: ${bid_amount:.2f}")

    def determine_winner(self) -> Winner:
        """
        Determine the winner from a snapshot of all bidders.

        The bidder with the lowest current bid wins; equal bids go to the
        bidder whose last bid came first.

        Returns:
            Winner with the bidder's ID and name

        Raises:
            NoWinnerError: No bidders, or none with a name
        """
        with self._span("auction.determine_winner"):
            best: Optional[Bidder] = None
            for bidder in self._store.list_bidders():
                if is_winner(best, bidder):
                    best = bidder

            if best is None or not best.name:
                if self.config.metrics_enabled:
                    metrics.record_winner(False)
                logger.warning(f"[AUCTION] No winner for auction {self.id}")
                raise NoWinnerError(f"no winner for auction {self.id}")

            if self.config.metrics_enabled:
                metrics.record_winner(True)
            logger.info(
                f"[AUCTION] Winner for auction {self.id}: {best.name} "
                f"(bid: ${best.current_bid:.2f})"
            )
            return Winner(id=best.id, name=best.name)

    def get_bidder(self, bidder_id: uuid.UUID) -> Bidder:
        """Return a copy of a bidder's current state."""
        return self._store.get_bidder(bidder_id)

    def bidders(self) -> List[Bidder]:
        """Return a snapshot of all bidders."""
        return self._store.list_bidders()


def is_winner(current: Optional[Bidder], candidate: Bidder) -> bool:
    """
    Check whether candidate should replace the current winner.

    A candidate replaces the current winner if:
    - there is no current winner (or it has no name)
    - its bid is lower than the current winner's
    - its bid equals the current winner's but was placed earlier
    """
    if current is None or not current.name:
        return True
    if candidate.current_bid < current.current_bid:
        return True
    return (
        candidate.current_bid == current.current_bid
        and candidate.last_bid_time < current.last_bid_time
    )


def new_auction(
    bidders: Sequence[BidderConfig],
    *,
    store: Optional[BidderStore] = None,
    clock: Callable[[], int] = time.monotonic_ns,
    id_factory: Callable[[], uuid.UUID] = uuid.uuid4,
    config: Optional[EngineConfig] = None,
) -> Auction:
    """
    Create an auction from validated bidders.

    Args:
        bidders: Bidder configurations
        store: Empty store to seed (defaults to a new InMemoryStore)
        clock: Monotonic nanosecond clock used for the tie-break
        id_factory: Generates the auction ID
        config: Optional engine configuration

    Returns:
        Auction seeded with the bidders

    Raises:
        InvalidAuctionConfigError: Validation failed; .reason holds the cause
        DuplicateBidderError: A bidder could not be added to the store
        ValueError: The injected store already holds bidders
    """
    config = config or EngineConfig()

    try:
        validate_auction_config(bidders, min_bidders=config.min_bidders)
    except AuctionError as e:
        logger.warning(f"[AUCTION] Invalid auction data: {e}")
        raise InvalidAuctionConfigError(e) from e

    if store is None:
        store = InMemoryStore()
    elif store.list_bidders():
        raise ValueError("store passed to new_auction must be empty")

    for bidder in to_bidders(bidders):
        store.add_bidder(bidder)

    auction = Auction(id_factory(), store, clock=clock, config=config)

    if config.metrics_enabled:
        metrics.record_auction_created()
    logger.info(f"[AUCTION] Created auction {auction.id} with {len(bidders)} bidders")

    return auction


def _rejection_reason(error: AuctionError) -> str:
    if isinstance(error, ExceededMaxBidError):
        return "exceeded_max"
    if isinstance(error, BidderNotFoundError):
        return "not_found"
    if isinstance(error, BelowStartingBidError):
        return "below_starting"
    if isinstance(error, BidNotIncreasingError):
        return "not_increasing"
    return "other"
