"""
Prometheus metrics for the auction engine.

Counts auctions, accepted and rejected bids, and winner determinations,
and times bid placement.
"""

from prometheus_client import (
    Counter,
    Histogram,
    generate_latest,
    REGISTRY,
)


# ============================================================================
# AUCTION METRICS
# ============================================================================

auctions_created_total = Counter(
    "auction_created_total", "Total number of auctions created"
)

bids_placed_total = Counter(
    "auction_bids_placed_total", "Total number of accepted bids"
)

bids_rejected_total = Counter(
    "auction_bids_rejected_total",
    "Total number of rejected bids",
    ["reason"],  # not_found, below_starting, exceeded_max, not_increasing
)

place_bid_latency = Histogram(
    "auction_place_bid_latency_seconds",
    "Time to validate and store a bid",
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5],
)

winners_determined_total = Counter(
    "auction_winners_determined_total",
    "Total number of winner determinations",
    ["outcome"],  # winner or no_winner
)


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def record_auction_created():
    auctions_created_total.inc()


def record_bid_placed():
    bids_placed_total.inc()


def record_bid_rejected(reason: str):
    bids_rejected_total.labels(reason=reason).inc()


def record_winner(found: bool):
    winners_determined_total.labels(outcome="winner" if found else "no_winner").inc()


def get_metrics() -> bytes:
    """
    Get metrics in Prometheus format.

    Returns:
        Metrics as bytes in Prometheus exposition format
    """
    return generate_latest(REGISTRY)
