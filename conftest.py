"""
Pytest configuration for auction tests.

Provides a deterministic clock and a bidder factory.
"""

import itertools
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

import pytest

from auction.bidder import BidderConfig


class CounterClock:
    """Clock returning strictly increasing integers, starting at 1"""

    def __init__(self):
        self._counter = itertools.count(1)

    def __call__(self) -> int:
        return next(self._counter)


@pytest.fixture
def clock():
    """Fixture that provides a fresh deterministic clock"""
    return CounterClock()


@pytest.fixture
def make_bidder():
    """Fixture that builds BidderConfig instances with less verbosity"""

    def _make(name, starting_bid, max_bid, increment, **kwargs):
        return BidderConfig(
            name=name,
            starting_bid=starting_bid,
            max_bid=max_bid,
            auto_increment=increment,
            **kwargs,
        )

    return _make
