import logging
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Iterable, Optional, Protocol, Tuple

from core.cache import QueryCache
from core.errors import BackendError

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def success(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...


@dataclass
class MutationResult:
    ok: bool
    data: Any = None
    error: Optional[str] = None


def run_mutation(cache: QueryCache, notifier: Notifier, action: Callable[[], Any], *,
                 success: Optional[str] = None, failure: str = "Something went wrong",
                 invalidate: Iterable[Tuple[Hashable, ...]] = ()) -> MutationResult:
    """Run one backend write, then notify and invalidate the affected queries.

    A failed write leaves the cache untouched so the caller can keep its form
    state and let the user retry.
    """
    try:
        data = action()
    except BackendError as e:
        logger.error("mutation failed: %s", e.message or e)
        message = e.message or failure
        notifier.error(message)
        return MutationResult(False, error=message)
    for key in invalidate:
        cache.invalidate(*key)
    if success:
        notifier.success(success)
    return MutationResult(True, data=data)
