"""Exceptions raised by the cache core."""


class InvalidTTLError(ValueError):
    """Raised when a TTL is not a finite number of milliseconds."""

    def __init__(self, ttl: object):
        super().__init__(f"TTL must be a finite number of milliseconds, got {ttl!r}")
        self.ttl = ttl
