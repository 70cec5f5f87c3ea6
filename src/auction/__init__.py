"""
Auction module: Proxy bidding with bounded auto-increments and winner selection.
"""

from .bidder import Bidder, BidderConfig
from .config import EngineConfig
from .engine import Auction, Winner, new_auction
from .errors import (
    AuctionError,
    BelowStartingBidError,
    BidderDataIssue,
    BidderNotFoundError,
    BidNotIncreasingError,
    DuplicateBidderError,
    DuplicateBidderIDError,
    ExceededMaxBidError,
    InsufficientBiddersError,
    InvalidAuctionConfigError,
    InvalidBidderDataError,
    NoWinnerError,
)
from .simulation import SimulationResult, run_until_exhausted
from .store import BidderStore, InMemoryStore

__all__ = [
    "Auction",
    "Winner",
    "new_auction",
    "Bidder",
    "BidderConfig",
    "EngineConfig",
    "BidderStore",
    "InMemoryStore",
    "SimulationResult",
    "run_until_exhausted",
    "AuctionError",
    "BelowStartingBidError",
    "BidderDataIssue",
    "BidderNotFoundError",
    "BidNotIncreasingError",
    "DuplicateBidderError",
    "DuplicateBidderIDError",
    "ExceededMaxBidError",
    "InsufficientBiddersError",
    "InvalidAuctionConfigError",
    "InvalidBidderDataError",
    "NoWinnerError",
]
