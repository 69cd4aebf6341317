"""
Bounded-concurrency wave scheduler.

Items are split into waves of at most `max_concurrent`. All items of a wave
run concurrently on a thread pool; the next wave starts only once every
future of the current one has settled. No more than `max_concurrent` calls
are ever in flight.
"""

from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Sequence
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WaveOutcome:
    item: Hashable
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def chunked(items: Sequence[Any], size: int) -> List[List[Any]]:
    """Split `items` into consecutive lists of at most `size` elements"""
    if size < 1:
        raise ValueError(f"chunk size must be >= 1, got {size}")
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


def run_in_waves(
    items: Iterable[Hashable],
    fn: Callable[[Any], Any],
    max_concurrent: int,
    on_wave_complete: Optional[Callable[[int, List[WaveOutcome]], None]] = None,
) -> Dict[Hashable, WaveOutcome]:
    """
    Apply `fn` to every item, `max_concurrent` at a time, wave by wave

    Args:
        items: Distinct hashable work items (e.g. page offsets)
        fn: Callable run once per item on a worker thread
        max_concurrent: Upper bound on simultaneous calls (wave size)
        on_wave_complete: Called on the calling thread after each wave settles

    Returns:
        Dict[item, WaveOutcome]: Value or raised exception per item. A failing
        item never aborts its siblings or later waves.
    """
    if max_concurrent < 1:
        raise ValueError(f"max_concurrent must be >= 1, got {max_concurrent}")

    waves = chunked(list(items), max_concurrent)
    outcomes: Dict[Hashable, WaveOutcome] = {}
    if not waves:
        return outcomes

    with ThreadPoolExecutor(
        max_workers=max_concurrent, thread_name_prefix="wave"
    ) as pool:
        for index, wave in enumerate(waves, 1):
            logger.debug(f"Starting wave {index}/{len(waves)}: {wave}")
            futures = {pool.submit(fn, item): item for item in wave}
            wait(futures)

            settled = []
            for future, item in futures.items():
                try:
                    outcome = WaveOutcome(item=item, value=future.result())
                except Exception as e:
                    outcome = WaveOutcome(item=item, error=e)
                settled.append(outcome)
                outcomes[item] = outcome

            if on_wave_complete is not None:
                on_wave_complete(index, settled)

    return outcomes
