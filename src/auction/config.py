"""
Engine Configuration: Settings for auction construction and instrumentation.
"""

import os
from dataclasses import dataclass

from auction.validation import MIN_BIDDERS


@dataclass
class EngineConfig:
    """
    Auction engine settings.

    Attributes:
        min_bidders: Minimum bidders required to create an auction
        metrics_enabled: Record Prometheus metrics for bids and winners
        tracing_enabled: Wrap bid placement and winner selection in spans
    """

    min_bidders: int = MIN_BIDDERS
    metrics_enabled: bool = True
    tracing_enabled: bool = True

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Create config from environment variables"""
        return cls(
            min_bidders=int(os.getenv("AUCTION_MIN_BIDDERS", str(MIN_BIDDERS))),
            metrics_enabled=os.getenv("AUCTION_METRICS_ENABLED", "true").lower() == "true",
            tracing_enabled=os.getenv("AUCTION_TRACING_ENABLED", "true").lower() == "true",
        )
