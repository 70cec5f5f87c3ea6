"""
Bidder Records: Participant parameters and current bid state.
"""

import uuid
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Iterable, List, Optional, Union

Amount = Union[Decimal, int, float, str]


def to_decimal(value: Amount) -> Decimal:
    """Coerce an amount to Decimal, going through str so floats stay exact."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass
class Bidder:
    """
    Stored state of one auction participant.

    Attributes:
        id: Unique bidder identifier
        name: Display label
        starting_bid: Floor for any accepted bid
        max_bid: Ceiling for any accepted bid
        current_bid: Most recent accepted bid (or seed value)
        auto_increment: Step added on each accepted bid
        last_bid_time: Nanosecond timestamp of the last accepted bid, 0 if never bid
    """

    id: uuid.UUID
    name: str
    starting_bid: Decimal
    max_bid: Decimal
    current_bid: Decimal
    auto_increment: Decimal
    last_bid_time: int = 0

    def copy(self) -> "Bidder":
        return replace(self)

    def has_bid(self) -> bool:
        return self.last_bid_time != 0


@dataclass
class BidderConfig:
    """
    Caller-supplied bidder parameters for a new auction.

    current_bid defaults to starting_bid when omitted; an explicit value
    is kept as-is at seeding.
    """

    name: str
    starting_bid: Amount
    max_bid: Amount
    auto_increment: Amount
    id: Optional[uuid.UUID] = None
    current_bid: Optional[Amount] = None
    last_bid_time: int = 0

    def __post_init__(self):
        if self.id is None:
            self.id = uuid.uuid4()
        self.starting_bid = to_decimal(self.starting_bid)
        self.max_bid = to_decimal(self.max_bid)
        self.auto_increment = to_decimal(self.auto_increment)
        if self.current_bid is not None:
            self.current_bid = to_decimal(self.current_bid)


def to_bidder(config: BidderConfig) -> Bidder:
    """Convert a BidderConfig into a stored Bidder record."""
    current_bid = config.current_bid
    if current_bid is None:
        current_bid = config.starting_bid

    return Bidder(
        id=config.id,
        name=config.name,
        starting_bid=config.starting_bid,
        max_bid=config.max_bid,
        current_bid=current_bid,
        auto_increment=config.auto_increment,
        last_bid_time=config.last_bid_time,
    )


def to_bidders(configs: Iterable[BidderConfig]) -> List[Bidder]:
    return [to_bidder(config) for config in configs]
