"""Error taxonomy for upstream fetches and aggregation inputs."""


class TravelPulseError(Exception):
    """Base class for all travel-pulse errors."""


class SourceUnavailable(TravelPulseError):
    """A single upstream call failed. Callers treat it as zero items."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source} unavailable: {reason}")


class RateLimited(SourceUnavailable):
    """Upstream explicitly signalled throttling (HTTP 429)."""

    def __init__(self, source: str, reason: str = "rate limited"):
        super().__init__(source, reason)


class InvalidInput(TravelPulseError):
    """The caller supplied a location that cannot be resolved."""
