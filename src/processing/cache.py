"""Bounded LRU cache of transcript-level results keyed by engine, text and config."""

from __future__ import annotations

import dataclasses
import hashlib
import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.processing.models import ProcessingResult

if TYPE_CHECKING:
    from src.pipeline_config import PipelineConfig

logger = logging.getLogger(__name__)


def make_cache_key(engine_name: str, text: str, config: PipelineConfig | None = None) -> str:
    """Stable key for an (engine, transcript, config) triple.

    Every config field that shapes the result (summary policy, caps, chunk
    size, thresholds) is folded into the digest. ``max_retries`` is left out
    because it never changes a successful result.
    """
    digest = hashlib.sha256(text.encode("utf-8"))
    if config is not None:
        fingerprint = repr(dataclasses.replace(config, max_retries=0))
        digest.update(b"\0" + fingerprint.encode("utf-8"))
    return f"{engine_name}_{digest.hexdigest()}"


@dataclass
class _Entry:
    result: ProcessingResult
    cost: int


class ResultCache:
    """Thread-safe LRU bounded by entry count and total byte cost.

    The cost of an entry is supplied by the caller (the transcript's UTF-8
    size). Least recently used entries are evicted until both limits hold. An
    entry whose cost alone exceeds ``max_total_cost`` is not stored.
    """

    def __init__(self, max_entries: int = 50, max_total_cost: int = 50 * 1024 * 1024) -> None:
        self.max_entries = max_entries
        self.max_total_cost = max_total_cost
        self._entries: OrderedDict[str, _Entry] = OrderedDict()
        self._total_cost = 0
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def total_cost(self) -> int:
        with self._lock:
            return self._total_cost

    @property
    def hit_rate(self) -> float:
        with self._lock:
            lookups = self.hits + self.misses
            return self.hits / lookups if lookups else 0.0

    def get(self, key: str) -> ProcessingResult | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.misses += 1
                return None
            self._entries.move_to_end(key)
            self.hits += 1
            return entry.result

    def put(self, key: str, result: ProcessingResult, cost: int) -> None:
        if cost > self.max_total_cost or self.max_entries < 1:
            logger.debug("Skipping cache entry %s (cost %d)", key, cost)
            return

        with self._lock:
            previous = self._entries.pop(key, None)
            if previous is not None:
                self._total_cost -= previous.cost

            self._entries[key] = _Entry(result=result, cost=cost)
            self._total_cost += cost

            while len(self._entries) > self.max_entries or self._total_cost > self.max_total_cost:
                evicted_key, evicted = self._entries.popitem(last=False)
                self._total_cost -= evicted.cost
                logger.debug("Evicted cache entry %s", evicted_key)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._total_cost = 0
        logger.info("Cleared result cache")
