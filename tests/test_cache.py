"""Tests for the bounded result cache."""

from __future__ import annotations

import threading
from dataclasses import replace

from src.pipeline_config import ClassifierConfig, PipelineConfig, SummaryPolicy
from src.processing.cache import ResultCache, make_cache_key
from src.processing.models import ProcessingResult


def _result(summary: str) -> ProcessingResult:
    return ProcessingResult(summary=summary)


class TestMakeCacheKey:
    def test_stable(self) -> None:
        assert make_cache_key("OpenAI", "hello") == make_cache_key("OpenAI", "hello")

    def test_depends_on_engine_and_text(self) -> None:
        assert make_cache_key("OpenAI", "hello") != make_cache_key("Claude", "hello")
        assert make_cache_key("OpenAI", "hello") != make_cache_key("OpenAI", "hello!")

    def test_prefixed_with_engine_name(self) -> None:
        assert make_cache_key("OpenAI", "hello").startswith("OpenAI_")

    def test_depends_on_result_shaping_config(self) -> None:
        base = PipelineConfig()
        variants = [
            replace(base, summary_policy=SummaryPolicy.DEDUPLICATE),
            replace(base, max_tasks=5),
            replace(base, max_reminders=5),
            replace(base, max_summary_sentences=2),
            replace(base, similarity_threshold=0.5),
            replace(base, max_words_per_chunk=100),
            replace(base, max_context_tokens=100),
            replace(base, classifier=ClassifierConfig(general_threshold=0.5)),
        ]

        keys = {make_cache_key("OpenAI", "hello", cfg) for cfg in [base, *variants]}

        assert len(keys) == len(variants) + 1

    def test_retry_count_does_not_change_key(self) -> None:
        base = PipelineConfig()
        assert make_cache_key("OpenAI", "hello", base) == make_cache_key(
            "OpenAI", "hello", replace(base, max_retries=5)
        )


class TestResultCache:
    def test_miss_then_hit(self) -> None:
        cache = ResultCache()
        assert cache.get("k") is None

        cache.put("k", _result("s"), cost=10)

        assert cache.get("k") == _result("s")
        assert cache.hits == 1
        assert cache.misses == 1
        assert cache.hit_rate == 0.5

    def test_hit_rate_without_lookups(self) -> None:
        assert ResultCache().hit_rate == 0.0

    def test_evicts_least_recently_used_by_count(self) -> None:
        cache = ResultCache(max_entries=2)
        cache.put("a", _result("a"), cost=1)
        cache.put("b", _result("b"), cost=1)
        cache.get("a")  # "b" is now least recently used
        cache.put("c", _result("c"), cost=1)

        assert cache.get("b") is None
        assert cache.get("a") is not None
        assert cache.get("c") is not None
        assert len(cache) == 2

    def test_evicts_by_total_cost(self) -> None:
        cache = ResultCache(max_entries=10, max_total_cost=100)
        cache.put("a", _result("a"), cost=60)
        cache.put("b", _result("b"), cost=60)

        assert cache.get("a") is None
        assert cache.total_cost == 60

    def test_oversized_entry_not_stored(self) -> None:
        cache = ResultCache(max_total_cost=100)
        cache.put("big", _result("big"), cost=101)

        assert len(cache) == 0
        assert cache.total_cost == 0

    def test_replacing_key_updates_cost(self) -> None:
        cache = ResultCache()
        cache.put("k", _result("old"), cost=40)
        cache.put("k", _result("new"), cost=10)

        assert cache.get("k") == _result("new")
        assert cache.total_cost == 10
        assert len(cache) == 1

    def test_clear(self) -> None:
        cache = ResultCache()
        cache.put("k", _result("s"), cost=5)
        cache.clear()

        assert len(cache) == 0
        assert cache.total_cost == 0

    def test_stats_wait_for_in_flight_writes(self) -> None:
        cache = ResultCache()
        cache.put("k", _result("s"), cost=5)
        cache.get("k")
        seen: dict[str, float] = {}

        def read_stats() -> None:
            seen["total_cost"] = cache.total_cost
            seen["hit_rate"] = cache.hit_rate

        with cache._lock:
            reader = threading.Thread(target=read_stats)
            reader.start()
            reader.join(timeout=0.1)
            # blocked behind the writer's lock
            assert reader.is_alive()
            assert seen == {}

        reader.join(timeout=5)
        assert seen == {"total_cost": 5, "hit_rate": 1.0}
