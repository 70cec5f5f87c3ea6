"""
Auction Errors: Exception taxonomy for construction, bidding and winner selection.
"""

from enum import Enum


class AuctionError(Exception):
    """Base class for all auction errors"""


class BidderDataIssue(Enum):
    """Reasons a single bidder's parameters are rejected"""

    NON_POSITIVE_STARTING_BID = "non_positive_starting_bid"
    MAX_BELOW_STARTING_BID = "max_below_starting_bid"
    NON_POSITIVE_INCREMENT = "non_positive_increment"
    NON_FINITE_AMOUNT = "non_finite_amount"


# Construction-time errors


class InsufficientBiddersError(AuctionError):
    """Raised when an auction is configured with too few bidders"""


class DuplicateBidderIDError(AuctionError):
    """Raised when two bidders in the input share an identifier"""

    def __init__(self, bidder_id):
        super().__init__(f"duplicate bidder ID detected: {bidder_id}")
        self.bidder_id = bidder_id


class InvalidBidderDataError(AuctionError):
    """Raised when a bidder's starting bid, max bid or increment is invalid"""

    def __init__(self, bidder_id, issue: BidderDataIssue, detail: str):
        super().__init__(f"invalid bidder data for bidder ID {bidder_id}: {detail}")
        self.bidder_id = bidder_id
        self.issue = issue


class InvalidAuctionConfigError(AuctionError):
    """Raised when auction construction fails validation"""

    def __init__(self, reason: AuctionError):
        super().__init__(f"invalid auction data: {reason}")
        self.reason = reason


# Store errors


class DuplicateBidderError(AuctionError):
    """Raised when adding a bidder whose ID is already stored"""

    def __init__(self, bidder_id):
        super().__init__(f"bidder already exists: {bidder_id}")
        self.bidder_id = bidder_id


class BidderNotFoundError(AuctionError):
    """Raised when a bidder ID is not in the store"""

    def __init__(self, bidder_id):
        super().__init__(f"bidder not found: {bidder_id}")
        self.bidder_id = bidder_id


# Bid placement errors


class BelowStartingBidError(AuctionError):
    """Raised when the next bid would fall below the bidder's starting bid"""


class ExceededMaxBidError(AuctionError):
    """
    Raised when the next bid would exceed the bidder's maximum bid.

    This is the expected terminal condition for a bidder: callers catch it
    by type and stop bidding for that participant.
    """


class BidNotIncreasingError(AuctionError):
    """Raised when the next bid would not exceed the current bid"""


# Winner errors


class NoWinnerError(AuctionError):
    """Raised when no bidder qualifies as winner"""
