import logging
import threading

from cachetools import TTLCache

from stampit.settings import VIEW_CACHE_MAXSIZE, VIEW_CACHE_TTL_SECONDS


logger = logging.getLogger(__name__)

BUSINESS_STATS = "business-stats"
BUSINESS_REVIEWS = "business-reviews"
CUSTOMER_REVIEWS = "customer-reviews"

_MISSING = object()

# sync endpoints run in a threadpool; TTLCache is not thread-safe
_lock = threading.RLock()
_views: TTLCache = TTLCache(maxsize=VIEW_CACHE_MAXSIZE, ttl=VIEW_CACHE_TTL_SECONDS)
# bumped on every invalidation; a load that overlaps one is not stored
_epoch = 0


def _key(view: str, entity_id) -> tuple[str, str]:
    return (view, str(entity_id))


def get_or_load(view: str, entity_id, loader):
    """Return the cached view for entity_id, calling loader() on a miss.

    loader() runs outside the lock so a slow query does not block other views.
    """
    key = _key(view, entity_id)
    with _lock:
        value = _views.get(key, _MISSING)
        epoch = _epoch
    if value is not _MISSING:
        return value

    value = loader()
    with _lock:
        if epoch == _epoch:
            _views[key] = value
    return value


def invalidate(view: str, entity_id) -> None:
    global _epoch

    key = _key(view, entity_id)
    with _lock:
        _epoch += 1
        removed = _views.pop(key, _MISSING)
    if removed is not _MISSING:
        logger.debug("view invalidated", extra={"view": view, "entity_id": str(entity_id)})


def invalidate_business(business_id) -> None:
    invalidate(BUSINESS_STATS, business_id)
    invalidate(BUSINESS_REVIEWS, business_id)


def clear() -> None:
    global _epoch

    with _lock:
        _epoch += 1
        _views.clear()
