"""Read caches for event endpoints.

Every key embeds a generation number. Bumping the generation on any event
write makes all previously cached listings and details unreachable at once.
"""

import time

from django.conf import settings
from django.core.cache import cache

GENERATION_KEY = "events:generation"


def _fresh_generation() -> int:
    return time.time_ns()


def cache_key(*parts: object) -> str:
    generation = cache.get_or_set(GENERATION_KEY, _fresh_generation, timeout=None)
    return ":".join(["events", f"v{generation}", *(str(part) for part in parts)])


def cache_timeout() -> int:
    return getattr(settings, "EVENTS_CACHE_TIMEOUT", 300)


def invalidate_all() -> None:
    try:
        cache.incr(GENERATION_KEY)
    except ValueError:
        cache.set(GENERATION_KEY, _fresh_generation(), timeout=None)
