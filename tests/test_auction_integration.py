"""
Integration tests for full auctions.

Tests:
- Round-robin auctions run to exhaustion
- Concurrent bidding on separate and shared bidders
- Winner after concurrent bidding
"""

import sys
import os
import threading
import time
from decimal import Decimal

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest
from auction.engine import new_auction
from auction.errors import ExceededMaxBidError
from auction.simulation import run_until_exhausted


def final_bid(starting, maximum, increment):
    """Highest bid reachable by stepping from starting without passing maximum"""
    steps = (Decimal(str(maximum)) - Decimal(str(starting))) // Decimal(str(increment))
    return Decimal(str(starting)) + steps * Decimal(str(increment))


class TestAuctionScenarios:
    """Test complete round-robin auctions"""

    @pytest.mark.parametrize(
        "bidders, expected_finals, expected_winner",
        [
            (
                [("Sasha", 50, 80, 3), ("John", 60, 82, 2), ("Pat", 55, 85, 5)],
                {"Sasha": 80, "John": 82, "Pat": 85},
                "Sasha",
            ),
            (
                [("Riley", 700, 725, 2), ("Morgan", 599, 725, 15), ("Charlie", 625, 725, 8)],
                {"Riley": 724, "Morgan": 719, "Charlie": 721},
                "Morgan",
            ),
            (
                [("Alex", 2500, 3000, 500), ("Jesse", 2800, 3100, 201), ("Drew", 2501, 3200, 247)],
                {"Alex": 3000, "Jesse": 3001, "Drew": 2995},
                "Drew",
            ),
        ],
    )
    def test_round_robin_to_exhaustion(
        self, make_bidder, clock, bidders, expected_finals, expected_winner
    ):
        """Verify final bids and the lowest-bid winner after every bidder is exhausted"""
        configs = [make_bidder(*params) for params in bidders]
        auction = new_auction(configs, clock=clock)

        result = run_until_exhausted(auction, [c.id for c in configs])

        assert result.exhausted
        finals = {b.name: b.current_bid for b in auction.bidders()}
        assert finals == {name: Decimal(v) for name, v in expected_finals.items()}

        for config in configs:
            with pytest.raises(ExceededMaxBidError):
                auction.place_bid(config.id)

        assert auction.determine_winner().name == expected_winner

    def test_simulation_counts(self, make_bidder, clock):
        """Verify rounds and accepted bids are reported per bidder"""
        sasha = make_bidder("Sasha", 50, 80, 3)
        john = make_bidder("John", 60, 82, 2)
        pat = make_bidder("Pat", 55, 85, 5)
        auction = new_auction([sasha, john, pat], clock=clock)

        result = run_until_exhausted(auction, [sasha.id, john.id, pat.id])

        assert result.accepted_bids == {sasha.id: 10, john.id: 11, pat.id: 6}
        assert result.total_bids == 27
        # John's eleventh bid is in round 11; every bidder drops out in round 12 at the latest.
        assert result.rounds == 12

    def test_simulation_round_cap(self, make_bidder, clock):
        """Verify max_rounds stops the simulation early"""
        a = make_bidder("A", 10, 100, 1)
        b = make_bidder("B", 10, 100, 1)
        auction = new_auction([a, b], clock=clock)

        result = run_until_exhausted(auction, [a.id, b.id], max_rounds=3)

        assert not result.exhausted
        assert result.rounds == 3
        assert auction.get_bidder(a.id).current_bid == Decimal("13")


class TestConcurrentBidding:
    """Test bid placement from parallel threads"""

    def test_disjoint_bidders_in_parallel(self, make_bidder):
        """Verify concurrent bidders never exceed max bid and lose no updates"""
        params = [("Sasha", 50, 80, 3), ("John", 60, 82, 2), ("Pat", 55, 85, 5)]
        configs = [make_bidder(*p) for p in params]
        auction = new_auction(configs)

        accepted = {c.id: 0 for c in configs}
        errors = []

        def bid_until_exhausted(bidder_id):
            while True:
                time.sleep(0.001)  # simulate delay
                try:
                    auction.place_bid(bidder_id)
                except ExceededMaxBidError:
                    return
                except Exception as e:
                    errors.append(e)
                    return
                accepted[bidder_id] += 1

        threads = [
            threading.Thread(target=bid_until_exhausted, args=(c.id,)) for c in configs
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        for config, (_, starting, maximum, increment) in zip(configs, params):
            bidder = auction.get_bidder(config.id)
            assert bidder.current_bid <= bidder.max_bid
            assert bidder.current_bid == final_bid(starting, maximum, increment)
            assert bidder.current_bid == config.starting_bid + accepted[config.id] * config.auto_increment

        winner = auction.determine_winner()
        assert winner.name == "Sasha"

    def test_same_bidder_from_many_threads(self, make_bidder):
        """Verify concurrent bids for one bidder are applied one at a time"""
        target = make_bidder("Target", 1, 501, 1)
        auction = new_auction([target, make_bidder("Other", 1, 10, 1)])

        lock = threading.Lock()
        results = {"accepted": 0, "exceeded": 0}

        def hammer():
            while True:
                try:
                    auction.place_bid(target.id)
                except ExceededMaxBidError:
                    with lock:
                        results["exceeded"] += 1
                    return
                with lock:
                    results["accepted"] += 1

        threads = [threading.Thread(target=hammer) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results["accepted"] == 500
        assert results["exceeded"] == 8
        assert auction.get_bidder(target.id).current_bid == Decimal("501")

    def test_winner_during_concurrent_bidding(self, make_bidder):
        """Verify winner determination works while bids are still landing"""
        configs = [make_bidder(f"B{i}", 10, 200, 1) for i in range(4)]
        auction = new_auction(configs)
        stop = threading.Event()
        winners = []

        def bidder_loop(bidder_id):
            for _ in range(100):
                auction.place_bid(bidder_id)

        def winner_loop():
            while not stop.is_set():
                winners.append(auction.determine_winner())

        watcher = threading.Thread(target=winner_loop)
        watcher.start()
        threads = [threading.Thread(target=bidder_loop, args=(c.id,)) for c in configs]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        stop.set()
        watcher.join()

        names = {c.name for c in configs}
        assert winners
        assert all(w.name in names for w in winners)
        for config in configs:
            assert auction.get_bidder(config.id).current_bid == Decimal("110")
