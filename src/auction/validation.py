"""
Auction Validation: Pre-flight checks on the initial bidder set.
"""

from typing import Sequence

from auction.bidder import BidderConfig
from auction.errors import (
    BidderDataIssue,
    DuplicateBidderIDError,
    InsufficientBiddersError,
    InvalidBidderDataError,
)

MIN_BIDDERS = 2


def validate_auction_config(
    bidders: Sequence[BidderConfig], min_bidders: int = MIN_BIDDERS
) -> None:
    """
    Check that the bidders for a new auction are valid.

    Bidders are checked in input order and the first problem found is raised.

    Args:
        bidders: Bidder configurations for the auction
        min_bidders: Minimum number of bidders required

    Raises:
        InsufficientBiddersError: Fewer than min_bidders bidders
        DuplicateBidderIDError: Two bidders share an ID
        InvalidBidderDataError: A bidder's amounts are invalid
    """
    if len(bidders) < min_bidders:
        raise InsufficientBiddersError(
            f"auction must have at least {min_bidders} bidders, got {len(bidders)}"
        )

    seen_ids = set()
    for bidder in bidders:
        if bidder.id in seen_ids:
            raise DuplicateBidderIDError(bidder.id)
        seen_ids.add(bidder.id)

        validate_bidder(bidder)


def validate_bidder(bidder: BidderConfig) -> None:
    """
    Check a single bidder's amounts.

    Raises:
        InvalidBidderDataError: With the specific BidderDataIssue
    """
    for field_name in ("starting_bid", "max_bid", "auto_increment", "current_bid"):
        amount = getattr(bidder, field_name)
        if amount is not None and not amount.is_finite():
            raise InvalidBidderDataError(
                bidder.id,
                BidderDataIssue.NON_FINITE_AMOUNT,
                f"{field_name.replace('_', ' ')} must be a finite amount, got {amount}",
            )

    if bidder.starting_bid <= 0:
        raise InvalidBidderDataError(
            bidder.id,
            BidderDataIssue.NON_POSITIVE_STARTING_BID,
            f"starting bid must be positive, got ${bidder.starting_bid:.2f}",
        )
    if bidder.max_bid < bidder.starting_bid:
        raise InvalidBidderDataError(
            bidder.id,
            BidderDataIssue.MAX_BELOW_STARTING_BID,
            f"max bid ${bidder.max_bid:.2f} must be greater than or equal to "
            f"starting bid ${bidder.starting_bid:.2f}",
        )
    if bidder.auto_increment <= 0:
        raise InvalidBidderDataError(
            bidder.id,
            BidderDataIssue.NON_POSITIVE_INCREMENT,
            f"auto-increment must be positive, got ${bidder.auto_increment:.2f}",
        )
