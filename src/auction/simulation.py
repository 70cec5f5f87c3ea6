"""
Auction Simulation: Round-robin proxy bidding until every bidder is exhausted.
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

from auction.engine import Auction
from auction.errors import ExceededMaxBidError

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Outcome of a bidding simulation"""

    rounds: int = 0
    accepted_bids: Dict[uuid.UUID, int] = field(default_factory=dict)
    exhausted: bool = True

    @property
    def total_bids(self) -> int:
        return sum(self.accepted_bids.values())


def run_until_exhausted(
    auction: Auction,
    bidder_ids: Sequence[uuid.UUID],
    max_rounds: Optional[int] = None,
) -> SimulationResult:
    """
    Bid for each bidder in turn until all of them reach their max bid.

    A bidder drops out on its first ExceededMaxBidError. Any other error
    propagates to the caller.

    Args:
        auction: Auction to bid in
        bidder_ids: Bidders to bid for, in round-robin order
        max_rounds: Optional cap on rounds; result.exhausted is False if hit

    Returns:
        SimulationResult with rounds played and accepted bids per bidder
    """
    result = SimulationResult(accepted_bids={bidder_id: 0 for bidder_id in bidder_ids})
    active = list(bidder_ids)

    while active:
        if max_rounds is not None and result.rounds >= max_rounds:
            result.exhausted = False
            break

        result.rounds += 1
        for bidder_id in list(active):
            try:
                auction.place_bid(bidder_id)
            except ExceededMaxBidError:
                active.remove(bidder_id)
                continue
            result.accepted_bids[bidder_id] += 1

    logger.info(
        f"[AUCTION] Simulation for {auction.id} finished after {result.rounds} rounds "
        f"({result.total_bids} bids, exhausted: {result.exhausted})"
    )
    return result
