"""TTL resolution and expiration rules.

Pure functions shared by the cache orchestrator and by callers that filter
``meta()`` output themselves. All values are in milliseconds.
"""

import math
import time
from typing import Optional

from nova.domain.exceptions import InvalidTTLError
from nova.domain.models.cache import CacheEntryMeta, Milliseconds, Timestamp


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def validate_ttl(ttl: Optional[Milliseconds]) -> Optional[Milliseconds]:
    """Returns the TTL unchanged, or raises InvalidTTLError.

    None passes through. Negative values are allowed and yield entries that
    are already expired when written.
    """
    if ttl is None:
        return None
    if isinstance(ttl, bool) or not isinstance(ttl, (int, float)) or not math.isfinite(ttl):
        raise InvalidTTLError(ttl)
    return ttl


def resolve_ttl(
    explicit_ttl: Optional[Milliseconds] = None,
    default_ttl: Optional[Milliseconds] = None,
) -> Optional[Milliseconds]:
    """Resolves the effective TTL for a write.

    The explicit TTL wins over the default. Returns None ("no expiration")
    when neither is set or when the resolved value is exactly zero.
    """
    resolved = explicit_ttl if explicit_ttl is not None else default_ttl
    validate_ttl(resolved)

    if resolved is None or resolved == 0:
        return None

    return resolved


def expires_at_for(ttl: Optional[Milliseconds], now: Timestamp) -> Optional[Timestamp]:
    """Absolute expiry for a resolved TTL written at ``now``."""
    if ttl is None:
        return None
    return now + ttl


def is_expired(entry: CacheEntryMeta, now: Optional[Timestamp] = None) -> bool:
    """Checks whether an entry has expired.

    The expiry instant itself is still live; only times strictly after it
    count as expired.
    """
    if entry.expires_at is None:
        return False

    if now is None:
        now = now_ms()

    return now > entry.expires_at
